"""FastAPI + Tailwind interface for the bibliography resolver.

Run with:
    uvicorn reference_resolver.web:app --reload
"""
from __future__ import annotations

from html import escape

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse

from .app import ReferenceResolverApp
from .parsers import TitleBlockError
from .report import render_report

app = FastAPI(title="Reference Resolver", description="Resolve citations from the browser")


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>Reference Resolver</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">Reference Resolver</h1>
                <p class=\"text-gray-600 mt-2\">Paste an mmark manuscript to see which citations resolve into the normative and informative references.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _form_page(report: str | None = None, title_xml: str | None = None) -> str:
    """Render the landing page with optional report output."""

    text_form = """
    <form action=\"/resolve-text\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <h2 class=\"text-xl font-semibold text-gray-800\">Paste Manuscript Text</h2>
        <p class=\"text-gray-600 text-sm mb-3\">Include a {backmatter} marker so the bibliography has somewhere to go.</p>
        <label class=\"block text-sm font-medium text-gray-700 mb-2\" for=\"text\">Manuscript text</label>
        <textarea name=\"text\" required placeholder=\"%%%&#10;title = ...&#10;%%%\" class=\"w-full h-44 border border-gray-300 rounded-md p-3 text-sm\"></textarea>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Resolve</button>
    </form>
    """

    report_block = ""
    if report:
        report_block = f"""
        <div class=\"mt-8\">
            <h2 class=\"text-xl font-semibold text-gray-800\">Bibliography</h2>
            <pre class=\"mt-3 bg-gray-900 text-green-100 p-4 rounded-lg whitespace-pre-wrap text-sm\">{escape(report)}</pre>
        </div>
        """

    title_block = ""
    if title_xml:
        title_block = f"""
        <div class=\"mt-4\">
            <h2 class=\"text-xl font-semibold text-gray-800\">Title block XML</h2>
            <pre class=\"mt-3 bg-gray-100 p-4 rounded-lg whitespace-pre-wrap text-sm\">{escape(title_xml)}</pre>
        </div>
        """

    return _layout(text_form + report_block + title_block)


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the text submission form."""

    return HTMLResponse(_form_page())


@app.post("/resolve-text", response_class=HTMLResponse)
async def resolve_text(text: str = Form(...)) -> HTMLResponse:
    """Resolve pasted manuscript text and return the bibliography report."""

    resolver = ReferenceResolverApp()
    try:
        result = resolver.process_text(text)
    except TitleBlockError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return HTMLResponse(_form_page(render_report(result), title_xml=result.title_xml))


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("reference_resolver.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]

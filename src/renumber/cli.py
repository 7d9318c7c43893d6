"""Command-line interface for renumber.

Provides:
- `run`: Rewrite one PDF (path or URL) with a new phone number.
- `batch`: Rewrite many PDFs into an output directory.
- `api`: Launch the HTTP service.
"""

import typer
from glob import glob
from pathlib import Path
from typing import List, Optional
from rich import print

from .batch import run_batch
from .core import Mode, RunConfig, process_path
from .errors import RenumberError
from .fonts import DEFAULT_FONT_URL
from .layout import LayoutConfig

app = typer.Typer(add_completion=False, help="Find and replace phone numbers in PDFs")


def _build_config(
    mode: Mode,
    offline: bool,
    font_path: Optional[str],
    line_policy: str,
    use_llm: bool,
    llm_model: str,
    prompt_path: Optional[str],
    preview_dir: Optional[str] = None,
) -> RunConfig:
    if line_policy not in {"first", "nearest"}:
        raise typer.BadParameter("line policy must be 'first' or 'nearest'")
    return RunConfig(
        mode=mode,
        layout=LayoutConfig(line_policy=line_policy),
        font_path=font_path,
        font_url=None if offline else DEFAULT_FONT_URL,
        use_llm=use_llm,
        llm_model=llm_model,
        prompt_path=prompt_path,
        preview_dir=preview_dir,
    )


@app.command()
def run(
    input: str = typer.Option(..., "--input", "-i", help="Input PDF path or URL"),
    output: str = typer.Option(..., "--output", "-o", help="Output PDF path"),
    number: str = typer.Option(..., "--number", "-n", help="Replacement phone number"),
    mode: Mode = typer.Option(Mode.IN_PLACE, help="in_place | rebuild | presentable"),
    offline: bool = typer.Option(
        False, "--offline/--online", help="Use the built-in font instead of downloading one"
    ),
    font_path: Optional[str] = typer.Option(None, help="Local TTF/OTF font file"),
    line_policy: str = typer.Option("first", help="Line clustering: first | nearest"),
    use_llm: bool = typer.Option(False, help="LLM cleanup for presentable mode"),
    llm_model: str = typer.Option("llama3.1:8b", help="Ollama model name"),
    prompt_path: Optional[str] = typer.Option(None, help="Cleanup prompt file"),
    previews: bool = typer.Option(False, help="Write per-page PNG previews"),
):
    """Replace every phone number in a PDF and write the result.

    Parameters
    ----------
    input:
        PDF path or HTTP(S) URL.
    output:
        Output PDF path. A ``.meta.json`` record is written beside it.
    number:
        Text stamped in place of each phone number.
    mode:
        ``in_place`` keeps the layout; ``rebuild`` and ``presentable`` reflow
        the text onto new pages.
    """
    preview_dir = None
    if previews:
        out = Path(output)
        preview_dir = str(out.parent / f"{out.stem}.previews")
    cfg = _build_config(
        mode, offline, font_path, line_policy, use_llm, llm_model, prompt_path, preview_dir
    )
    try:
        res = process_path(input, output, number, cfg, write_metadata=True)
    except RenumberError as exc:
        print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1)
    print(f"[green]Output PDF:[/green] {output} ({res['replacements']} replacements)")
    print(f"[green]Details:[/green] {res['meta']}")


@app.command()
def batch(
    inputs: List[str] = typer.Argument(..., help="Input PDFs, directories or glob patterns"),
    output_dir: str = typer.Option(..., help="Output directory for PDFs"),
    number: str = typer.Option(..., "--number", "-n", help="Replacement phone number"),
    mode: Mode = typer.Option(Mode.IN_PLACE, help="in_place | rebuild | presentable"),
    workers: int = typer.Option(1, help="Concurrent worker processes"),
    offline: bool = typer.Option(
        False, "--offline/--online", help="Use the built-in font instead of downloading one"
    ),
    font_path: Optional[str] = typer.Option(None, help="Local TTF/OTF font file"),
    line_policy: str = typer.Option("first", help="Line clustering: first | nearest"),
):
    """Batch process multiple inputs; one failure does not stop the rest."""
    files: List[str] = []
    for item in inputs:
        p = Path(item)
        if p.is_dir():
            files.extend(str(fp) for fp in sorted(p.iterdir()) if fp.suffix.lower() == ".pdf")
        elif p.exists() or item.startswith(("http://", "https://")):
            files.append(item)
        else:
            files.extend(sorted(glob(item)))
    if not files:
        print("[red]No inputs found[/red]")
        raise typer.Exit(code=1)

    cfg = _build_config(mode, offline, font_path, line_policy, False, "llama3.1:8b", None)
    results = run_batch(files, output_dir, number, cfg, workers=workers)
    for r in results:
        if r.ok:
            print(f"[green]ok[/green] {r.input} -> {r.output_path} ({r.replacements})")
        else:
            print(f"[red]failed[/red] {r.input}: {r.error}")
    done = sum(1 for r in results if r.ok)
    print(f"[green]Completed {done}/{len(results)} files[/green]")
    if done < len(results):
        raise typer.Exit(code=1)


@app.command()
def api(
    host: Optional[str] = typer.Option(None, help="Bind host (default from settings)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default from settings)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Launch the HTTP API with uvicorn."""
    from .api import run as run_api

    run_api(host=host, port=port, reload=reload)


def api_main() -> None:
    """Console-script entry point for ``renumber-api``."""
    typer.run(api)


if __name__ == "__main__":
    app()

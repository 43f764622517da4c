"""Entry point to the application as a Typer CLI."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from typer import Typer

from textprobe.configuration import config, load_configuration
from textprobe.data_models import CorpusDocument, LabelledSample, LocalReport
from textprobe.engine import DocumentAnalysisEngine

app = Typer(no_args_is_help=True)


def read_corpus(directory: Path) -> list[CorpusDocument]:
    """
    Read reference documents from text files of a directory.

    Args:
        directory (Path): Directory with `*.txt` files. File stems become
            document identifiers.

    Returns:
        list[CorpusDocument]: Documents sorted by their identifiers.
    """
    return [
        CorpusDocument(id=path.stem, text=path.read_text(encoding="utf-8"))
        for path in sorted(directory.glob("*.txt"))
    ]


@app.command("analyse")
def analyse(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False)],
    corpus: Annotated[
        Path | None, typer.Option(exists=True, file_okay=False)
    ] = None,
    model: Annotated[Path | None, typer.Option(exists=True, dir_okay=False)] = None,
    configuration: Annotated[
        Path | None, typer.Option("--config", exists=True, dir_okay=False)
    ] = None,
    highlights: bool = False,
) -> None:
    """Analyse a plain-text document and print the report as JSON."""
    from textprobe.ml.stylometric_predictor import StylometricPredictor

    settings = load_configuration(configuration) if configuration else config
    text = file.read_text(encoding="utf-8")
    documents = read_corpus(corpus) if corpus else []

    async def run() -> LocalReport:
        if model is None:
            return DocumentAnalysisEngine(settings).analyse(text, documents)
        async with StylometricPredictor(model_path=model) as predictor:
            engine = DocumentAnalysisEngine(settings, predictor=predictor)
            return await engine.analyse_with_model(text, documents)

    report = asyncio.run(run())
    output: dict[str, object] = {
        "report": report.model_dump(mode="json", by_alias=True)
    }
    if highlights:
        groups = DocumentAnalysisEngine(settings).highlights(report)
        output["highlights"] = [
            group.model_dump(mode="json", by_alias=True) for group in groups
        ]
    typer.echo(json.dumps(output, indent=2, ensure_ascii=False))


@app.command("train")
def train(
    dataset: Annotated[Path, typer.Argument(exists=True, dir_okay=False)],
    model: Path = config.stylometric_model_path,
) -> None:
    """Train the stylometric predictor on a JSON Lines file of labelled samples."""
    from textprobe.ml.stylometric_predictor import StylometricPredictor

    samples = [
        LabelledSample.model_validate_json(line)
        for line in dataset.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    predictor = StylometricPredictor(model_path=model)
    accuracy = predictor.fit(samples)
    predictor.save()
    logger.info(f"Training accuracy of the stylometric predictor: {accuracy:.4f}")


if __name__ == "__main__":
    app()

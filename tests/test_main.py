import json

import pytest
from loguru import logger
from typer.testing import CliRunner

from textprobe.main import app, read_corpus

runner = CliRunner()

DATASET = [
    {"text": "i burnt the toast again, whatever", "is_ai": False},
    {"text": "the bus was late so we just walked home", "is_ai": False},
    {
        "text": "Photosynthesis converts light energy into chemical energy.",
        "is_ai": False,
        "is_plagiarised": True,
    },
    {"text": "Furthermore, it is important to note that data matters.", "is_ai": True},
    {"text": "Moreover, innovation plays a crucial role in society.", "is_ai": True},
    {"text": "In conclusion, we must leverage a myriad of tools.", "is_ai": True},
]


@pytest.fixture(autouse=True)
def quiet_logger():
    logger.disable("textprobe")
    yield
    logger.enable("textprobe")


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "essay.txt"
    path.write_text(
        "Photosynthesis converts light energy into chemical energy. "
        "My dog likes long walks in the park.",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def corpus(tmp_path):
    directory = tmp_path / "corpus"
    directory.mkdir()
    (directory / "biology.txt").write_text(
        "Photosynthesis converts light energy into chemical energy.",
        encoding="utf-8",
    )
    (directory / "notes.md").write_text("Ignored.", encoding="utf-8")
    return directory


def test_read_corpus(corpus):
    documents = read_corpus(corpus)
    assert [document.id for document in documents] == ["biology"]


def test_analyse(document):
    result = runner.invoke(app, ["analyse", str(document)])
    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert set(output) == {"report"}
    assert len(output["report"]["sentences"]) == 2
    assert output["report"]["analysis"]["modelUsed"] == "heuristic"


def test_analyse_with_corpus_and_highlights(document, corpus):
    result = runner.invoke(
        app, ["analyse", str(document), "--corpus", str(corpus), "--highlights"]
    )
    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["report"]["sentences"][0]["source"] == "biology"
    assert output["report"]["plagiarism"] == 100
    classes = [group["className"] for group in output["highlights"]]
    assert classes == ["ai-suspect", "plagiarism-suspect"]


def test_analyse_missing_file(tmp_path):
    result = runner.invoke(app, ["analyse", str(tmp_path / "missing.txt")])
    assert result.exit_code != 0


def test_train_then_analyse_with_model(tmp_path, document):
    dataset = tmp_path / "dataset.jsonl"
    dataset.write_text(
        "\n".join(json.dumps(sample) for sample in DATASET) + "\n", encoding="utf-8"
    )
    model = tmp_path / "model.pickle"

    result = runner.invoke(app, ["train", str(dataset), "--model", str(model)])
    assert result.exit_code == 0
    assert model.is_file()

    result = runner.invoke(app, ["analyse", str(document), "--model", str(model)])
    assert result.exit_code == 0
    report = json.loads(result.stdout)["report"]
    assert report["analysis"]["modelUsed"] == "heuristic+StylometricPredictor"

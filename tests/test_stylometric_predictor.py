import asyncio

import pytest
from conftest import GENERATED_TEXT

from textprobe.data_models import LabelledSample
from textprobe.engine import DocumentAnalysisEngine
from textprobe.ml.stylometric_predictor import StylometricPredictor

COPIED_TEXT = (
    "The mitochondrion is the powerhouse of the cell and produces most of the "
    "chemical energy needed to power biochemical reactions."
)

SAMPLES = [
    LabelledSample(text="honestly i forgot my keys again, typical monday", is_ai=False),
    LabelledSample(text="we got soaked at the match lol, worth it though", is_ai=False),
    LabelledSample(text="Grandma's soup recipe never measures anything.", is_ai=False),
    LabelledSample(text=COPIED_TEXT, is_ai=False, is_plagiarised=True),
    LabelledSample(
        text="Furthermore, it is important to note that innovation drives growth.",
        is_ai=True,
    ),
    LabelledSample(
        text="Moreover, technology plays a crucial role in the modern era.",
        is_ai=True,
    ),
    LabelledSample(
        text="In conclusion, it is essential to leverage a myriad of strategies.",
        is_ai=True,
    ),
    LabelledSample(
        text="Additionally, we must delve into the tapestry of human experience.",
        is_ai=True,
    ),
]


@pytest.fixture
def predictor() -> StylometricPredictor:
    predictor = StylometricPredictor(model_path=None)
    predictor.fit(SAMPLES)
    return predictor


def test_fit_requires_both_classes():
    human = [sample for sample in SAMPLES if not sample.is_ai]
    with pytest.raises(ValueError, match="both"):
        StylometricPredictor(model_path=None).fit(human)


def test_fit_returns_training_accuracy():
    accuracy = StylometricPredictor(model_path=None).fit(SAMPLES)
    assert 0.0 <= accuracy <= 1.0


def test_predict_before_fit():
    with pytest.raises(RuntimeError, match="not prepared"):
        asyncio.run(StylometricPredictor(model_path=None).predict("Some text."))


def test_initialise_without_model_file(tmp_path):
    predictor = StylometricPredictor(model_path=tmp_path / "missing.pickle")
    with pytest.raises(FileNotFoundError):
        asyncio.run(predictor.initialise())


def test_prediction_is_bounded(predictor):
    prediction = asyncio.run(predictor.predict(GENERATED_TEXT))
    for value in (
        prediction.ai_score,
        prediction.plagiarism_score,
        prediction.confidence,
    ):
        assert 0.0 <= value <= 100.0
    assert set(prediction.features) == {
        "vocabulary_diversity",
        "avg_word_length",
        "repetition_rate",
        "semantic_plagiarism",
    }


def test_copied_reference_is_plagiarised(predictor):
    prediction = asyncio.run(predictor.predict(COPIED_TEXT))
    assert prediction.plagiarism_score >= 99.0


def test_save_requires_model_path(predictor):
    with pytest.raises(RuntimeError):
        predictor.save()


def test_saved_model_can_be_loaded(tmp_path):
    path = tmp_path / "models" / "stylometric.pickle"
    trained = StylometricPredictor(model_path=path)
    trained.fit(SAMPLES)
    trained.save()
    expected = asyncio.run(trained.predict(GENERATED_TEXT))

    async def load_and_predict() -> float:
        async with StylometricPredictor(model_path=path) as loaded:
            assert loaded.is_ready
            return (await loaded.predict(GENERATED_TEXT)).ai_score

    assert asyncio.run(load_and_predict()) == pytest.approx(expected.ai_score)


def test_dispose_releases_the_model(predictor):
    asyncio.run(predictor.dispose())
    assert not predictor.is_ready


def test_engine_blends_the_stylometric_prediction(configuration, predictor):
    engine = DocumentAnalysisEngine(configuration, predictor=predictor)
    report = asyncio.run(engine.analyse_with_model(GENERATED_TEXT))
    assert report.analysis.model_used == "heuristic+StylometricPredictor"

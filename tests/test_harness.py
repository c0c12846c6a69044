import io

from truthsense.harness import BANNER, SAMPLE_HEADLINES, format_result, run_samples
from truthsense.models import ClassificationResult


def test_run_samples_prints_every_headline():
    out = io.StringIO()
    results = run_samples(out=out)
    text = out.getvalue()

    assert text.startswith(BANNER + "\n\n")
    assert len(results) == len(SAMPLE_HEADLINES) == 12
    for headline in SAMPLE_HEADLINES:
        assert f"Headline: {headline}\n" in text
    assert " → Confidence: 94%" in text


def test_sample_labels():
    results = run_samples(out=io.StringIO())
    labels = [r.label for r in results]
    confidences = [r.confidence for r in results]
    assert labels == [
        "fake",
        "fake",
        "trustworthy",
        "fake",
        "trustworthy",
        "trustworthy",
        "fake",
        "fake",
        "trustworthy",
        "trustworthy",
        "trustworthy",
        "trustworthy",
    ]
    assert confidences == [75, 94, 71, 75, 65, 65, 70, 90, 65, 77, 83, 65]


def test_format_result():
    result = ClassificationResult(label="fake", confidence=70, explanation="Short.")
    assert format_result("Aliens land", result) == (
        "Headline: Aliens land\n"
        " → Label: fake\n"
        " → Confidence: 70%\n"
        " → Explanation: Short.\n"
    )


def test_run_samples_custom_list():
    out = io.StringIO()
    results = run_samples(["", "Aliens land"], out=out)
    assert [r.confidence for r in results] == [0, 70]

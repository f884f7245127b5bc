"""Tests for conflict detection between evidence records."""

import pytest

from factcheckr.domain.services.conflict_analyzer import (
    VERDICT_CONFLICT_EXPLANATION,
    ConflictAnalyzer,
)


@pytest.fixture
def analyzer() -> ConflictAnalyzer:
    return ConflictAnalyzer()


def test_empty_evidence(analyzer):
    result = analyzer.analyze([])
    assert not result.has_conflicts
    assert result.explanation == ""


def test_single_record_never_conflicts(analyzer, make_record):
    """One record cannot disagree with itself, whatever it says."""
    result = analyzer.analyze([make_record(summary="It is true and also false", verdict="True")])
    assert not result.has_conflicts


def test_opposing_verdict_labels(analyzer, make_record):
    evidence = [
        make_record(source="Snopes", verdict="True"),
        make_record(source="Other", verdict="False"),
    ]
    result = analyzer.analyze(evidence)
    assert result.has_conflicts
    assert result.explanation == VERDICT_CONFLICT_EXPLANATION


def test_verdict_labels_are_case_folded(analyzer, make_record):
    evidence = [
        make_record(source="A", verdict="mostly TRUE"),
        make_record(source="B", verdict="FALSE"),
    ]
    assert analyzer.analyze(evidence).has_conflicts


def test_opposing_summaries_name_the_pair(analyzer, make_record):
    evidence = [
        make_record(source="Liquipedia", summary="Team Spirit won the final"),
        make_record(source="ESPN Sports News", summary="Team Spirit lost the final"),
    ]
    result = analyzer.analyze(evidence)
    assert result.has_conflicts
    assert result.explanation == "Conflicting information between: Liquipedia vs ESPN Sports News"


def test_summary_check_is_symmetric(analyzer, make_record):
    """The pair is flagged whichever record carries which word."""
    evidence = [
        make_record(source="A", summary="the result was false"),
        make_record(source="B", summary="the result was true"),
    ]
    assert analyzer.analyze(evidence).has_conflicts


def test_multiple_conflicting_pairs(analyzer, make_record):
    evidence = [
        make_record(source="A", summary="they won"),
        make_record(source="B", summary="they lost"),
        make_record(source="C", summary="they lost again"),
    ]
    result = analyzer.analyze(evidence)
    assert result.explanation == "Conflicting information between: A vs B, A vs C"


def test_agreeing_evidence(analyzer, make_record):
    evidence = [
        make_record(source="A", summary="The Sun is a star"),
        make_record(source="B", summary="The Sun is the star at the center of the Solar System"),
    ]
    result = analyzer.analyze(evidence)
    assert not result.has_conflicts
    assert result.explanation == ""


def test_label_conflict_takes_precedence(analyzer, make_record):
    """Summaries are not scanned once the labels disagree."""
    evidence = [
        make_record(source="A", summary="they won", verdict="True"),
        make_record(source="B", summary="they lost", verdict="False"),
    ]
    assert analyzer.analyze(evidence).explanation == VERDICT_CONFLICT_EXPLANATION

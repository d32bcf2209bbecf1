import math

import pytest

from speaking_report.models.assessment import AssessmentRecord, record_from_payload


def test_record_from_payload_maps_wire_keys(sample_payload):
    record = record_from_payload(sample_payload)

    assert record.student_id == "STU001"
    assert record.student_name == "John Doe"
    assert record.test_date == "2024-12-20"
    assert record.overall_score == 7.5
    assert dict(record.skills) == {
        "pronunciation": 8.0,
        "fluency": 7.5,
        "vocabulary": 7.0,
        "grammar": 7.5,
    }


def test_record_payload_round_trips(sample_payload):
    record = record_from_payload(sample_payload)

    assert record.to_payload() == sample_payload


def test_records_compare_by_value(sample_payload, sample_record):
    assert record_from_payload(sample_payload) == sample_record
    assert hash(record_from_payload(sample_payload)) == hash(sample_record)


def test_record_is_read_only(sample_record):
    with pytest.raises(AttributeError):
        sample_record.overall_score = 9.0
    with pytest.raises(TypeError):
        sample_record.skills["grammar"] = 9.0


def test_integer_scores_are_accepted(sample_payload):
    sample_payload["overallScore"] = 7
    sample_payload["skills"]["grammar"] = 9

    record = record_from_payload(sample_payload)

    assert record.overall_score == 7.0
    assert record.skills["grammar"] == 9.0


@pytest.mark.parametrize("score", [-0.1, 9.01, math.nan])
def test_out_of_range_overall_score_is_rejected(sample_payload, score):
    sample_payload["overallScore"] = score

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "overallScore must be between 0 and 9" in str(exc.value)


def test_out_of_range_skill_score_is_rejected(sample_payload):
    sample_payload["skills"]["fluency"] = 10.0

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "skills.fluency" in str(exc.value)


def test_band_edges_are_accepted(sample_payload):
    sample_payload["overallScore"] = 0.0
    sample_payload["skills"]["grammar"] = 9.0

    record = record_from_payload(sample_payload)

    assert record.overall_score == 0.0
    assert record.skills["grammar"] == 9.0


def test_missing_skill_is_rejected(sample_payload):
    del sample_payload["skills"]["vocabulary"]

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "invalid shape" in str(exc.value)
    assert "vocabulary" in str(exc.value)


def test_keys_are_case_sensitive(sample_payload):
    sample_payload["overallscore"] = sample_payload.pop("overallScore")

    with pytest.raises(ValueError):
        record_from_payload(sample_payload)


def test_invalid_test_date_is_rejected(sample_payload):
    sample_payload["testDate"] = "20/12/2024"

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "testDate must be an ISO date" in str(exc.value)


def test_non_object_payload_is_rejected():
    with pytest.raises(ValueError) as exc:
        record_from_payload([1, 2, 3])

    assert "must be a JSON object" in str(exc.value)


def test_direct_construction_requires_all_skills():
    with pytest.raises(ValueError) as exc:
        AssessmentRecord(
            student_id="STU002",
            student_name="Jane Roe",
            test_date="2024-12-21",
            overall_score=6.0,
            skills={"pronunciation": 6.0, "fluency": 6.0},
        )

    assert "vocabulary" in str(exc.value)
    assert "grammar" in str(exc.value)


def test_boolean_scores_are_rejected_on_direct_construction():
    with pytest.raises(ValueError):
        AssessmentRecord(
            student_id="STU002",
            student_name="Jane Roe",
            test_date="2024-12-21",
            overall_score=True,
            skills={"pronunciation": 6.0, "fluency": 6.0, "vocabulary": 6.0, "grammar": 6.0},
        )


@pytest.mark.parametrize("score", ["7.5", True])
def test_non_numeric_overall_score_is_rejected(sample_payload, score):
    sample_payload["overallScore"] = score

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "overallScore" in str(exc.value)


@pytest.mark.parametrize("score", ["8", False])
def test_non_numeric_skill_score_is_rejected(sample_payload, score):
    sample_payload["skills"]["grammar"] = score

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "grammar" in str(exc.value)


def test_numeric_student_id_is_rejected(sample_payload):
    sample_payload["studentId"] = 1001

    with pytest.raises(ValueError) as exc:
        record_from_payload(sample_payload)

    assert "studentId" in str(exc.value)

import json

import httpx
import pytest

from speaking_report.clients.report_api import ReportApiClient
from speaking_report.models.assessment import AssessmentRecord

SAMPLE_PAYLOAD = {
    "studentId": "STU001",
    "studentName": "John Doe",
    "testDate": "2024-12-20",
    "overallScore": 7.5,
    "skills": {
        "pronunciation": 8.0,
        "fluency": 7.5,
        "vocabulary": 7.0,
        "grammar": 7.5,
    },
}


@pytest.fixture
def sample_payload():
    return json.loads(json.dumps(SAMPLE_PAYLOAD))


@pytest.fixture
def sample_record():
    return AssessmentRecord(
        student_id="STU001",
        student_name="John Doe",
        test_date="2024-12-20",
        overall_score=7.5,
        skills={"pronunciation": 8.0, "fluency": 7.5, "vocabulary": 7.0, "grammar": 7.5},
    )


@pytest.fixture
def data_file(tmp_path, sample_payload):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path


@pytest.fixture
async def report_client(sample_payload):
    async def handler(request):
        if request.url.path == "/api/student-report":
            return httpx.Response(200, json=sample_payload)
        return httpx.Response(404, json={"error": "not found"})

    transport = httpx.MockTransport(handler)
    client = ReportApiClient(base_url="http://reports.test", transport=transport)
    yield client
    await client.close()

"""
End-to-end tests for the HTTP surface with the model, embedder and index faked
"""
import json

import pytest

from utils.exceptions import UpstreamError

from conftest import QUESTIONS, QUIZ_JSON


PROFILE = {"technicalLevel": "beginner", "goal": "data scientist"}


def _quiz(client, number=None, **overrides):
    item = dict(PROFILE, **overrides)
    if number is not None:
        item["questionNumber"] = number
    return client.post("/api/quiz", json=[item])


class TestQuizEndpoint:

    def test_example_flow(self, client, fake_llm):
        fake_llm.responses = [QUIZ_JSON]

        first = _quiz(client, 1)
        second = _quiz(client, 2)
        third = _quiz(client, 3)
        again = _quiz(client, 1)

        assert first.status_code == 200
        assert first.headers["content-type"].startswith("text/plain")
        assert [first.text, second.text, third.text] == QUESTIONS
        assert len({first.text, second.text, third.text}) == 3
        assert again.text == first.text
        assert len(fake_llm.calls) == 1

    def test_default_question_number(self, client, fake_llm):
        fake_llm.responses = [QUIZ_JSON]
        assert _quiz(client).text == QUESTIONS[0]

    def test_extra_fields_are_ignored(self, client, fake_llm):
        fake_llm.responses = [QUIZ_JSON]
        assert _quiz(client, 2, name="Sam").text == QUESTIONS[1]

    @pytest.mark.parametrize("number", [0, 4, -3])
    def test_out_of_range_question_number(self, client, fake_llm, fake_embedder, number):
        response = _quiz(client, number)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_QUESTION_NUMBER"
        assert fake_llm.calls == []
        assert fake_embedder.calls == []

    @pytest.mark.parametrize("number", ["first", "2", True, 2.0])
    def test_non_integer_question_number(self, client, fake_llm, number):
        response = _quiz(client, number)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_QUESTION_NUMBER"
        assert fake_llm.calls == []

    def test_questions_are_returned_verbatim(self, client, fake_llm):
        fake_llm.responses = [json.dumps(["  Q1?  ", "Q2?\n", "Q3?"])]
        assert _quiz(client, 1).text == "  Q1?  "
        assert _quiz(client, 2).text == "Q2?\n"

    @pytest.mark.parametrize("body", [
        [],
        {},
        [{"goal": "data scientist"}],
        [{"technicalLevel": "beginner"}],
        [{"technicalLevel": "  ", "goal": "data scientist"}],
    ])
    def test_invalid_body(self, client, fake_llm, fake_embedder, body):
        response = client.post("/api/quiz", json=body)
        assert response.status_code == 400
        assert fake_llm.calls == []
        assert fake_embedder.calls == []

    def test_malformed_json(self, client):
        response = client.post(
            "/api/quiz", content=b"[{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    def test_fenced_output_is_accepted(self, client, fake_llm):
        fake_llm.responses = [f"```json\n{QUIZ_JSON}\n```"]
        assert _quiz(client, 3).text == QUESTIONS[2]

    def test_unparseable_output_is_500_and_retried_next_time(self, client, fake_llm):
        fake_llm.responses = ["1. What is data science?\n2. ...", QUIZ_JSON]

        failed = _quiz(client, 1)
        assert failed.status_code == 500
        body = failed.json()
        assert body["error"] == "QUIZ_DECODE_FAILED"
        assert "stack" not in body

        assert _quiz(client, 1).text == QUESTIONS[0]
        assert len(fake_llm.calls) == 2

    def test_upstream_error_hides_internal_details(self, client, fake_llm):
        fake_llm.responses = [UpstreamError("openai", "Language model request failed", context={"model": "gpt-4o"})]
        response = _quiz(client, 1)
        assert response.status_code == 500
        assert response.json() == {
            "error": "UPSTREAM_ERROR",
            "message": "Language model request failed",
            "status_code": 500,
        }

    def test_unexpected_error_is_generic_500(self, lenient_client, fake_llm):
        fake_llm.responses = [RuntimeError("connection string postgres://admin:pw@db")]
        response = _quiz(lenient_client, 1)
        assert response.status_code == 500
        assert response.json()["message"] == "Internal Server Error"
        assert "postgres" not in response.text

    def test_invalidate(self, client, fake_llm):
        fake_llm.responses = [QUIZ_JSON, '["A?", "B?", "C?"]']
        assert _quiz(client, 1).text == QUESTIONS[0]

        response = client.request("DELETE", "/api/quiz", json=PROFILE)
        assert response.status_code == 200
        assert response.json() == {"session_key": "beginner-data scientist", "invalidated": True}

        assert _quiz(client, 1).text == "A?"

    def test_invalidate_requires_profile(self, client):
        response = client.request("DELETE", "/api/quiz", json={"goal": "data scientist"})
        assert response.status_code == 400


class TestAnalysisEndpoint:

    def test_analysis(self, client, fake_llm):
        fake_llm.responses = ["Let's check the answer together!\nYou were able to answer correctly: ..."]
        response = client.post("/api/analysis", json={
            "studentInfo": PROFILE,
            "question": QUESTIONS[0],
            "userAnswer": "Cleaning data and building models.",
        })
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.startswith("Let's check the answer together!")

    @pytest.mark.parametrize("body", [
        {},
        {"studentInfo": PROFILE, "question": "Q?"},
        {"studentInfo": PROFILE, "userAnswer": "A."},
        {"question": "Q?", "userAnswer": "A."},
        {"studentInfo": {"technicalLevel": "beginner"}, "question": "Q?", "userAnswer": "A."},
    ])
    def test_missing_fields(self, client, fake_llm, body):
        response = client.post("/api/analysis", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "MISSING_FIELDS"
        assert fake_llm.calls == []

    def test_fallback_sentinel(self, client, fake_llm):
        fake_llm.responses = [None]
        response = client.post("/api/analysis", json={
            "studentInfo": PROFILE, "question": "Q?", "userAnswer": "A.",
        })
        assert response.text == "No valid response received from AI"


class TestStudyPlanEndpoint:

    def test_study_plan(self, client, fake_llm):
        fake_llm.responses = ["Topic 1: Statistics, 2 weeks"]
        response = client.post("/api/studyplan", json={
            "studentInfo": PROFILE,
            "aiAnalysis": "You need to improve in statistics.",
        })
        assert response.status_code == 200
        assert response.text == "Topic 1: Statistics, 2 weeks"

    @pytest.mark.parametrize("body", [
        {},
        {"studentInfo": PROFILE},
        {"aiAnalysis": "analysis"},
        {"studentInfo": {}, "aiAnalysis": "analysis"},
    ])
    def test_missing_fields(self, client, fake_llm, body):
        response = client.post("/api/studyplan", json=body)
        assert response.status_code == 400
        assert fake_llm.calls == []


class TestChatEndpoint:

    def test_streams_reply(self, client, fake_llm, fake_embedder):
        fake_llm.stream_chunks = ["I'm Code-a-palooza, ", "an expert in Computer Science."]
        response = client.post("/api/chat", json=[
            {"role": "assistant", "content": "Welcome to the code-a-palooza!"},
            {"role": "user", "content": "Hi, I'm Sam."},
        ])
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "I'm Code-a-palooza, an expert in Computer Science."
        assert fake_embedder.calls == ["Hi, I'm Sam."]

    def test_model_failure_before_first_token_is_500(self, client, fake_llm):
        fake_llm.stream_chunks = [UpstreamError("openai", "Language model request failed")]
        response = client.post("/api/chat", json=[{"role": "user", "content": "hi"}])
        assert response.status_code == 500
        assert response.json()["error"] == "UPSTREAM_ERROR"

    def test_empty_reply(self, client, fake_llm):
        fake_llm.stream_chunks = []
        response = client.post("/api/chat", json=[{"role": "user", "content": "hi"}])
        assert response.status_code == 200
        assert response.text == ""

    @pytest.mark.parametrize("body", [
        [],
        {"role": "user", "content": "hi"},
        [{"role": "user", "content": ""}],
        [{"role": "user"}],
    ])
    def test_invalid_input(self, client, fake_llm, fake_embedder, body):
        response = client.post("/api/chat", json=body)
        assert response.status_code == 400
        assert fake_llm.calls == []
        assert fake_embedder.calls == []


class TestMisc:

    def test_root(self, client):
        assert client.get("/").json()["greeting"] == "Hello!"

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["quiz_store"] in ("memory", "redis")

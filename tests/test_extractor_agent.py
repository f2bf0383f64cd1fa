import json

import httpx
import pytest

from job_tracker_ai.agents import extractor_agent
from job_tracker_ai.agents.extractor_agent import (
    EXTRACTION_SYSTEM_PROMPT,
    LINKEDIN_WARNING,
    extract_job_data,
    run_extractor_agent,
)
from job_tracker_ai.config import UNABLE_TO_EXTRACT
from job_tracker_ai.schemas.extracted_job import ExtractedJobData
from tests.conftest import job_posting_html

POSTING_TEXT = (
    "Acme Robotics is hiring a Senior Backend Engineer. Location: Barcelona. "
    "Hybrid, three days in the office. Salary: €70,000 - €85,000. "
) * 12


def _fallback(company):
    return ExtractedJobData(
        company=company,
        role=UNABLE_TO_EXTRACT,
        salary="",
        location="",
        remote_status="",
    )


class TestExtractJobData:
    @pytest.mark.asyncio
    async def test_empty_page_skips_model_call(self, make_llm_client):
        client = make_llm_client(payload={})
        result = await extract_job_data(client, "https://dowjones.jobs/1", "", "Dow Jones")
        assert result == _fallback("Dow Jones")
        assert client.chat.completions.calls == []

    @pytest.mark.asyncio
    async def test_returns_model_fields(self, make_llm_client, job_payload):
        client = make_llm_client(payload=job_payload)
        result = await extract_job_data(client, "https://acme.example/jobs/1", POSTING_TEXT, None)
        assert result == ExtractedJobData(**job_payload)

    @pytest.mark.asyncio
    async def test_request_uses_strict_schema_and_prompt(self, make_llm_client, job_payload):
        client = make_llm_client(payload=job_payload)
        await extract_job_data(client, "https://careers.acme.com/jobs/1", POSTING_TEXT, "Acme")
        (call,) = client.chat.completions.calls

        response_format = call["response_format"]
        assert response_format["type"] == "json_schema"
        assert response_format["json_schema"]["strict"] is True
        schema = response_format["json_schema"]["schema"]
        assert sorted(schema["required"]) == ["company", "location", "remote_status", "role", "salary"]
        assert schema["additionalProperties"] is False

        system, user = call["messages"]
        assert system["content"] == EXTRACTION_SYSTEM_PROMPT
        assert "URL: https://careers.acme.com/jobs/1" in user["content"]
        assert '"Acme" job posting' in user["content"]
        assert POSTING_TEXT in user["content"]
        assert LINKEDIN_WARNING not in user["content"]

    @pytest.mark.asyncio
    async def test_linkedin_url_adds_warning(self, make_llm_client, job_payload):
        client = make_llm_client(payload=job_payload)
        await extract_job_data(client, "https://www.linkedin.com/jobs/view/1", POSTING_TEXT, "LinkedIn")
        user = client.chat.completions.calls[0]["messages"][1]["content"]
        assert LINKEDIN_WARNING in user

    @pytest.mark.asyncio
    async def test_fenced_json_is_accepted(self, make_llm_client, job_payload):
        client = make_llm_client(payload="```json\n" + json.dumps(job_payload) + "\n```")
        result = await extract_job_data(client, "https://acme.example/jobs/1", POSTING_TEXT, None)
        assert result.company == "Acme Robotics"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            "not json at all",
            "",
            '["a", "list"]',
            '{"company": "Acme", "role": "Engineer"}',
            '{"company": "Acme", "role": "Engineer", "salary": null, "location": "", "remote_status": ""}',
        ],
    )
    async def test_bad_model_output_falls_back(self, make_llm_client, payload):
        client = make_llm_client(payload=payload)
        result = await extract_job_data(client, "https://careers.acme.com/1", POSTING_TEXT, "Acme")
        assert result == _fallback("Acme")

    @pytest.mark.asyncio
    async def test_model_exception_matches_empty_content_result(self, make_llm_client):
        failing = make_llm_client(error=RuntimeError("API unavailable"))
        unused = make_llm_client(payload={})
        url = "https://dowjones.jobs/ny/engineer/1"

        on_error = await extract_job_data(failing, url, POSTING_TEXT, "Dow Jones")
        on_empty = await extract_job_data(unused, url, "", "Dow Jones")
        assert on_error == on_empty == _fallback("Dow Jones")


class TestRunExtractorAgent:
    @pytest.fixture
    def page_text(self, monkeypatch):
        """Replace the fetcher; returns a setter for the fetched text and the URLs requested."""
        state = {"text": "", "urls": []}

        async def fake_fetch(url):
            state["urls"].append(url)
            return state["text"]

        monkeypatch.setattr(extractor_agent, "fetch_page_text", fake_fetch)
        return state

    @pytest.mark.asyncio
    async def test_fetch_failure_uses_url_company(self, page_text, make_llm_client):
        client = make_llm_client(payload={})
        result = await run_extractor_agent("https://dowjones.jobs/new-york/engineer/123/", client=client)
        assert result == _fallback("Dow Jones")
        assert client.chat.completions.calls == []

    @pytest.mark.asyncio
    async def test_fetch_failure_without_hint(self, page_text, make_llm_client):
        result = await run_extractor_agent("https://example.com/job/1", client=make_llm_client(payload={}))
        assert result == _fallback(UNABLE_TO_EXTRACT)

    @pytest.mark.asyncio
    async def test_model_failure_equals_fetch_failure(self, page_text, make_llm_client):
        url = "https://dowjones.jobs/new-york/engineer/123/"
        page_text["text"] = ""
        on_empty = await run_extractor_agent(url, client=make_llm_client(payload={}))

        page_text["text"] = POSTING_TEXT
        on_error = await run_extractor_agent(url, client=make_llm_client(error=TimeoutError()))
        assert on_error == on_empty

    @pytest.mark.asyncio
    async def test_login_wall_is_not_sent_to_model(self, page_text, make_llm_client):
        page_text["text"] = "Sign in to view this job. Email or phone. Password. Forgot password?"
        client = make_llm_client(payload={})
        result = await run_extractor_agent("https://careers.acme.com/jobs/9", client=client)
        assert result == _fallback("Acme")
        assert client.chat.completions.calls == []

    @pytest.mark.asyncio
    async def test_url_is_normalized_before_fetch(self, page_text, make_llm_client):
        await run_extractor_agent(
            "https://www.linkedin.com/jobs/collections/recommended/?currentJobId=4345745336",
            client=make_llm_client(payload={}),
        )
        assert page_text["urls"] == ["https://www.linkedin.com/jobs/view/4345745336"]

    @pytest.mark.asyncio
    async def test_model_output_is_post_processed(self, page_text, make_llm_client, job_payload):
        page_text["text"] = POSTING_TEXT
        payload = dict(job_payload, location="Spain (Remote)", remote_status="")
        result = await run_extractor_agent("https://acme.example/jobs/1", client=make_llm_client(payload=payload))
        assert result.location == "Spain"
        assert result.remote_status == "Remote"
        assert result.salary == "€70,000 - €85,000"

    @pytest.mark.asyncio
    async def test_short_page_clears_implausible_values(self, page_text, make_llm_client, job_payload):
        page_text["text"] = "Barcelona. Backend Engineer at Acme Robotics. " * 10
        assert len(page_text["text"]) < 800
        payload = dict(job_payload, location="A", salary="$")
        result = await run_extractor_agent("https://acme.example/jobs/1", client=make_llm_client(payload=payload))
        assert result.location == ""
        assert result.salary == ""
        assert result.company == "Acme Robotics"

    @pytest.mark.asyncio
    async def test_missing_api_key_falls_back(self, page_text, monkeypatch):
        monkeypatch.setattr(extractor_agent, "OPENAI_API_KEY", "")
        page_text["text"] = POSTING_TEXT
        result = await run_extractor_agent("https://careers.stripe.com/listing/1")
        assert result == _fallback("Stripe")


@pytest.mark.asyncio
async def test_pipeline_over_http(mock_http, make_llm_client, job_payload):
    body = "<h1>Senior Backend Engineer</h1><p>Acme Robotics</p><p>Location: Barcelona (Hybrid)</p>" * 20
    mock_http(lambda request: httpx.Response(200, text=job_posting_html(body)))
    client = make_llm_client(payload=dict(job_payload, location="Barcelona (Hybrid)", remote_status=""))

    result = await run_extractor_agent("https://acme.example/jobs/1", client=client)

    assert result.location == "Barcelona"
    assert result.remote_status == "Hybrid"
    user = client.chat.completions.calls[0]["messages"][1]["content"]
    assert "window.__STATE__" not in user
    assert "Location: Barcelona (Hybrid)" in user

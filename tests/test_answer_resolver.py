import asyncio
import random

import httpx

from models.session_models import AnswerSource
from services.qa.answer_resolver import AnswerResolver
from services.qa.fallback_answers import GENERIC_ANSWERS, KNOWN_ANSWERS

from qa_helpers import FixedRng, json_body, make_remote

CONCLUSIONS = (
    "The document concludes that the findings support the initial hypothesis "
    "and suggest further research is needed."
)


def test_known_question_is_answered_from_exact_table():
    resolver = AnswerResolver()
    for _ in range(5):
        answer = asyncio.run(resolver.resolve("doc-1", "What are the conclusions?"))
        assert answer.text == CONCLUSIONS
        assert answer.source is AnswerSource.FALLBACK


def test_question_is_trimmed_before_lookup():
    rng = FixedRng(0)
    resolver = AnswerResolver(rng=rng)
    answer = asyncio.run(resolver.resolve("doc-1", "   What are the conclusions?\n"))
    assert answer.text == CONCLUSIONS
    assert rng.calls == 0


def test_lookup_is_case_sensitive():
    resolver = AnswerResolver(rng=FixedRng(2))
    answer = asyncio.run(resolver.resolve("doc-1", "what are the conclusions?"))
    assert answer.text == GENERIC_ANSWERS[2]


def test_unmapped_question_draws_from_generic_answers():
    resolver = AnswerResolver(rng=random.Random(7))
    seen = set()
    for _ in range(50):
        answer = asyncio.run(resolver.resolve("doc-1", "Is there an appendix?"))
        assert answer.text in GENERIC_ANSWERS
        seen.add(answer.text)
    assert len(seen) > 1


def test_injected_rng_selects_generic_answer_by_index():
    for index, expected in enumerate(GENERIC_ANSWERS):
        resolver = AnswerResolver(rng=FixedRng(index))
        assert resolver.fallback_answer("Anything else?") == expected


def test_every_known_question_maps_to_its_answer():
    resolver = AnswerResolver(rng=FixedRng(0))
    for question, expected in KNOWN_ANSWERS.items():
        assert resolver.fallback_answer(question) == expected


def test_remote_answer_is_returned_verbatim():
    captured = {}

    def handler(request):
        captured["path"] = request.url.path
        captured["body"] = json_body(request)
        return httpx.Response(200, json={"answer": "  Remote answer, verbatim.  "})

    resolver = AnswerResolver(make_remote(handler), rng=FixedRng(0))
    answer = asyncio.run(resolver.resolve("doc-9", "  What are the conclusions?  "))
    assert answer.text == "  Remote answer, verbatim.  "
    assert answer.source is AnswerSource.REMOTE
    assert captured == {
        "path": "/ask",
        "body": {"document_id": "doc-9", "question": "What are the conclusions?"},
    }


def test_remote_error_status_falls_back_to_tables():
    resolver = AnswerResolver(make_remote(lambda request: httpx.Response(503)), rng=FixedRng(0))
    answer = asyncio.run(resolver.resolve("doc-1", "What are the conclusions?"))
    assert answer.text == CONCLUSIONS
    assert answer.source is AnswerSource.FALLBACK


def test_remote_network_failure_falls_back_to_generic_answer():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    resolver = AnswerResolver(make_remote(handler), rng=FixedRng(4))
    answer = asyncio.run(resolver.resolve("doc-1", "Unmapped question"))
    assert answer.text == GENERIC_ANSWERS[4]
    assert answer.source is AnswerSource.FALLBACK


def test_malformed_remote_payload_falls_back():
    resolver = AnswerResolver(make_remote(lambda request: httpx.Response(200, json={"text": "x"})), rng=FixedRng(1))
    answer = asyncio.run(resolver.resolve("doc-1", "Unmapped question"))
    assert answer.text == GENERIC_ANSWERS[1]
    assert answer.source is AnswerSource.FALLBACK


def test_offline_resolver_reports_offline():
    assert AnswerResolver().offline
    assert not AnswerResolver(make_remote(lambda request: httpx.Response(200))).offline


def test_fallback_answer_matches_question_as_given():
    resolver = AnswerResolver(rng=FixedRng(3))
    assert resolver.fallback_answer(" What are the conclusions? ") == GENERIC_ANSWERS[3]
    assert resolver.fallback_answer("What are the conclusions?") == CONCLUSIONS

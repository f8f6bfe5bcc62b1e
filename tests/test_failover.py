import pytest

from services.relay_service.app.logic.failover import FailoverOrchestrator


def test_empty_adapter_list_rejected():
    with pytest.raises(ValueError):
        FailoverOrchestrator([])


def test_first_success_short_circuits(make_adapter, call_log, run):
    a = make_adapter("A", reply="first")
    b = make_adapter("B", reply="second")
    outcome = run(FailoverOrchestrator([a, b]).run("hi"))

    assert outcome.success is True
    assert outcome.data == "first"
    assert outcome.provider == "A"
    assert call_log == ["A"]
    assert b.calls == []


def test_falls_over_to_second_provider(make_adapter, call_log, run):
    a = make_adapter("A", error="quota exceeded")
    b = make_adapter("B", reply="hi there")
    c = make_adapter("C", reply="unused")
    outcome = run(FailoverOrchestrator([a, b, c]).run("hello"))

    assert outcome.model_dump(exclude_none=True) == {"success": True, "data": "hi there", "provider": "B"}
    assert call_log == ["A", "B"]
    assert a.calls == ["hello"]
    assert b.calls == ["hello"]
    assert c.calls == []


def test_all_failed_reports_last_error(make_adapter, call_log, run):
    a = make_adapter("A", error="invalid api key")
    b = make_adapter("B", error="rate limited")
    outcome = run(FailoverOrchestrator([a, b]).run("hello"))

    assert outcome.success is False
    assert outcome.provider == "None"
    assert "rate limited" in outcome.error
    assert "invalid api key" not in outcome.error
    assert outcome.error == "All API providers failed. Last error: rate limited"
    assert call_log == ["A", "B"]


def test_single_provider_variant(make_adapter, run):
    only = make_adapter("Groq", reply="ok")
    outcome = run(FailoverOrchestrator([only]).run("hello"))
    assert outcome.success is True
    assert outcome.provider == "Groq"
    assert len(only.calls) == 1


def test_provider_order_preserved(make_adapter):
    adapters = [make_adapter(n, reply="x") for n in ("OpenAI", "Groq", "Gemini")]
    assert FailoverOrchestrator(adapters).provider_names == ["OpenAI", "Groq", "Gemini"]


def test_duplicate_adapter_names_rejected(make_adapter):
    with pytest.raises(ValueError, match="Duplicate"):
        FailoverOrchestrator([make_adapter("A", reply="x"), make_adapter("A", reply="y")])

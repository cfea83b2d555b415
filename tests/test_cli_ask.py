import orjson
import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from tenacity import wait_none

import chains.cli_ask as cli_ask
import models.llm as llm_module
from chains.resume_answerer import ResumeAnswer
from chains.suggestions import SUGGESTED_QUESTIONS
from common.errors import CompletionBackendError


@pytest.fixture
def workspace(tmp_path, monkeypatch, raw_resume):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "resume.json").write_bytes(orjson.dumps(raw_resume))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli_ask._ask_with_retry.retry, "wait", wait_none())
    return tmp_path


def _run(monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", ["ask", *argv])
    cli_ask.main()


class FlakyAnswerer:
    """Fails a fixed number of times before answering."""

    calls = 0
    failures = 0

    def __init__(self, kb, llm=None, retriever=None, **kwargs):
        pass

    def ask(self, question, *, top_k=None):
        type(self).calls += 1
        if type(self).calls <= type(self).failures:
            raise CompletionBackendError("upstream timeout")
        return ResumeAnswer(answer="Recovered answer.", route="model", fragments=[])


@pytest.fixture
def flaky(monkeypatch):
    monkeypatch.setattr(FlakyAnswerer, "calls", 0)
    monkeypatch.setattr(cli_ask, "ResumeAnswerer", FlakyAnswerer)
    monkeypatch.setattr(cli_ask, "load_llm", lambda section: None)
    return FlakyAnswerer


def test_backend_errors_are_retried_until_success(workspace, monkeypatch, capsys, flaky):
    monkeypatch.setattr(flaky, "failures", 2)

    _run(monkeypatch, "What did you do at Acme?", "--mode", "lexical")

    assert flaky.calls == 3
    out = capsys.readouterr().out
    assert "Recovered answer." in out
    assert cli_ask.APOLOGY not in out


def test_exhausted_retries_print_apology_and_exit_nonzero(workspace, monkeypatch, capsys, flaky):
    monkeypatch.setattr(flaky, "failures", 100)

    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "What did you do at Acme?", "--mode", "lexical")

    assert exc.value.code == 1
    assert flaky.calls == cli_ask._ask_with_retry.retry.stop.max_attempt_number
    assert capsys.readouterr().out.strip() == cli_ask.APOLOGY


def test_suggest_lists_questions(monkeypatch, capsys):
    _run(monkeypatch, "--suggest")

    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"- {q}" for q in SUGGESTED_QUESTIONS]


def test_blank_question_is_a_usage_error(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "   ")
    assert exc.value.code == 2


def test_shortcut_answers_without_an_api_key(workspace, monkeypatch, capsys):
    monkeypatch.setattr(llm_module.yaml_config.llm_qa, "provider", "openai")
    monkeypatch.setattr(llm_module.secrets, "openai_api_key", None)

    _run(monkeypatch, "skills", "--mode", "lexical")

    out = capsys.readouterr().out
    assert "Here are my primary skills: Python, SQL, Go, go." in out
    assert cli_ask.APOLOGY not in out


def test_model_question_without_an_api_key_fails_once(workspace, monkeypatch, capsys):
    monkeypatch.setattr(llm_module.yaml_config.llm_qa, "provider", "openai")
    monkeypatch.setattr(llm_module.secrets, "openai_api_key", None)

    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "What did you do at Acme?", "--mode", "lexical")

    assert exc.value.code == 1
    assert cli_ask.APOLOGY in capsys.readouterr().out


def test_sources_flag_prints_retrieved_fragments(workspace, monkeypatch, capsys):
    model = FakeListChatModel(responses=["I built X at Acme."])
    monkeypatch.setattr(cli_ask, "load_llm", lambda section: model)

    _run(monkeypatch, "What did you do at Acme?", "--mode", "lexical", "--sources")

    out = capsys.readouterr().out
    assert "I built X at Acme." in out
    assert "=== SOURCES ===" in out
    assert "- [exp-0-0] (2.000) Experience: Engineer at Acme" in out

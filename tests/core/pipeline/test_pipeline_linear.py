# tests/core/pipeline/test_pipeline_linear.py
"""
Testes de construção e execução linear do Pipeline.

Este módulo valida o ciclo básico de `Pipeline.run`:
- cada Step recebe o valor corrente e a continuação
- o terminal de sucesso é alcançado quando o cursor chega ao total
- uma exceção de Step interrompe a cadeia e sobe inalterada
- um Step que não chama `next` encerra a cadeia sem erro

Invariantes:
    - 0 <= cursor <= total após a primeira chamada
    - Steps posteriores a uma falha nunca executam
    - `on_error` recebe o valor entregue ao Step que falhou

Limites explícitos:
    - Não valida cancelamento (ver test_pipeline_cancellation.py)
    - Não valida composição (ver test_pipeline_composition.py)
"""

import pytest

try:
    from chainflow.core.pipeline.pipeline import Pipeline
    from chainflow.core.config.settings import EngineSettings
    from chainflow.core.exceptions import PipelineConfigurationError
except Exception as e:  # noqa: BLE001
    Pipeline = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing pipeline core modules. Implement:\n"
            "- src/chainflow/core/pipeline/pipeline.py (Pipeline)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_two_increments_reach_success_with_final_value(never, recorder, increment):
    """
    Cenário canônico: [x+1, x+1] a partir de 1 termina com sucesso em 3.

    Invariantes:
        - `on_success` dispara exatamente uma vez, com o valor final
        - `run` retorna None no caminho de sucesso
        - o cursor termina igual ao total
    """
    _require_imports()
    p = recorder.attach(Pipeline(never, increment("a"), increment("b")))

    assert p.run(1) is None

    assert recorder.success == [3]
    assert recorder.trace == [("a", 1), ("b", 2)]
    assert recorder.errors == []
    assert p.cursor == p.total == 2
    assert p.completed


def test_step_error_fires_on_error_with_value_and_propagates(never, recorder, increment, failing):
    """
    Cenário canônico: [x+1, x+1, erro] a partir de 1.

    O erro é levantado ao chamador externo sem encapsulamento, e
    `on_error` dispara uma única vez com o valor 3 (após o segundo
    incremento) e a mesma instância de exceção.
    """
    _require_imports()
    boom = RuntimeError("fatal error occurred")
    p = recorder.attach(
        Pipeline(never, increment("a"), increment("b"), failing("c", boom))
    )

    with pytest.raises(RuntimeError) as info:
        p.run(1)

    assert info.value is boom
    assert recorder.errors == [(3, boom)]
    assert recorder.success == []
    assert not p.completed


def test_no_step_runs_after_error(never, recorder, increment, failing):
    _require_imports()
    p = recorder.attach(
        Pipeline(never, increment("a"), failing("b", ValueError("x")), increment("c"))
    )

    with pytest.raises(ValueError):
        p.run(0)

    assert [label for label, _ in recorder.trace] == ["a", "b"]
    assert len(recorder.errors) == 1


def test_step_that_never_calls_next_pauses_chain(never, recorder, increment):
    """
    Um Step que não chama `next` encerra a cadeia intencionalmente.

    Nenhum callback dispara, nenhum erro é levantado e os Steps
    seguintes nunca executam.
    """
    _require_imports()

    def stop(value, next):
        recorder.trace.append(("stop", value))

    p = recorder.attach(Pipeline(never, increment("a"), stop, increment("c")))
    p.run(1)

    assert recorder.trace == [("a", 1), ("stop", 2)]
    assert recorder.success == recorder.aborted == recorder.errors == []
    assert p.cursor == 1
    assert not p.completed


def test_zero_steps_succeeds_immediately(never, recorder):
    _require_imports()
    p = recorder.attach(Pipeline(never))

    p.run("v")

    assert recorder.success == ["v"]
    assert p.cursor == p.total == 0


def test_run_after_terminal_does_not_refire_or_move_cursor_past_total(never, recorder, increment):
    _require_imports()
    p = recorder.attach(Pipeline(never, increment("a")))

    p.run(1)
    p.run(10)
    p.run(20)

    assert recorder.success == [2]
    assert recorder.trace == [("a", 1)]
    assert p.cursor == p.total == 1


def test_resources_acquired_before_next_are_held_until_chain_returns(never):
    """
    A recursão mantém recursos de Steps anteriores retidos até o fim da
    cadeia: o último Step observa os dois recursos ainda abertos.
    """
    _require_imports()
    held = []
    observed = []

    def acquire(label):
        def _step(value, next):
            held.append(label)
            try:
                next(value)
            finally:
                held.remove(label)

        return _step

    def observe(value, next):
        observed.append(list(held))
        next(value)

    Pipeline(never, acquire("lock"), acquire("file"), observe).run(None)

    assert observed == [["lock", "file"]]
    assert held == []


def test_step_error_after_success_terminal_does_not_fire_on_error(never, recorder):
    """
    Uma exceção levantada depois que a cadeia já chegou ao terminal de
    sucesso (ex.: após `next` retornar) sobe ao chamador, mas sucesso e
    erro permanecem mutuamente exclusivos.
    """
    _require_imports()

    def late_failure(value, next):
        next(value)
        raise KeyError("cleanup")

    p = recorder.attach(Pipeline(never, late_failure))

    with pytest.raises(KeyError):
        p.run(5)

    assert recorder.success == [5]
    assert recorder.errors == []


def test_continuation_is_bound_run(never):
    _require_imports()
    seen = []

    def capture(value, next):
        seen.append(next)

    p = Pipeline(never, capture)
    p.run(0)

    assert seen[0] == p.run


def test_append_before_run_grows_total(never, recorder, increment):
    _require_imports()
    p = recorder.attach(Pipeline(never, increment("a")))

    assert p.append(increment("b")) is p
    assert p.total == 2

    p.run(0)
    assert recorder.success == [2]


def test_append_after_run_is_rejected(never, increment):
    _require_imports()
    p = Pipeline(never, increment("a"))
    p.run(0)

    with pytest.raises(PipelineConfigurationError):
        p.append(increment("b"))


def test_non_callable_step_is_rejected(never):
    _require_imports()
    with pytest.raises(PipelineConfigurationError) as info:
        Pipeline(never, "not a step")
    assert info.value.details["received"] == "str"


def test_chain_longer_than_max_chain_length_is_rejected(never, increment):
    _require_imports()
    settings = EngineSettings(max_chain_length=2)

    with pytest.raises(PipelineConfigurationError):
        Pipeline(never, increment("a"), increment("b"), increment("c"), settings=settings)

    p = Pipeline(never, increment("a"), increment("b"), settings=settings)
    with pytest.raises(PipelineConfigurationError):
        p.append(increment("c"))


def test_default_settings_accept_long_chains(never, recorder):
    _require_imports()

    def forward(value, next):
        next(value + 1)

    p = recorder.attach(Pipeline(never, *([forward] * 300)))
    p.run(0)

    assert p.settings.max_chain_length is None
    assert recorder.success == [300]


def test_run_after_error_reraises_without_running_steps(never, recorder, increment, failing):
    """
    Falha é desfecho terminal: uma nova chamada relança a mesma exceção
    sem executar Steps nem disparar `on_success`.
    """
    _require_imports()
    boom = RuntimeError("boom")
    p = recorder.attach(Pipeline(never, failing("a", boom), increment("b")))

    with pytest.raises(RuntimeError):
        p.run(1)
    with pytest.raises(RuntimeError) as info:
        p.run(1)

    assert info.value is boom
    assert p.failed is True
    assert p.cursor == 0
    assert recorder.trace == [("a", 1)]
    assert recorder.errors == [(1, boom)]
    assert recorder.success == []

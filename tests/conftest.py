# tests/conftest.py
"""
Fixtures compartilhados para testes do ChainFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML mínimas e determinísticas (defaults + local)
- um gravador de callbacks de ciclo de vida
- fábricas de Steps com efeitos colaterais observáveis

Decisões arquiteturais:
    - Steps de teste são funções simples `(value, next)`, sem herança
    - Efeitos colaterais são registrados em listas explícitas (`trace`)
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa pipeline
    - Nenhuma fixture realiza I/O
    - Cada teste recebe instâncias novas (sem estado compartilhado)
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def engine_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) do engine.

    Representa o conteúdo típico de um `config.defaults.yaml`, com a seção
    `engine` completa e uma seção alheia ao engine (`app`) que deve ser
    preservada pelo loader e ignorada pelos settings.
    """
    return """\
engine:
  abort_policy: raise
  max_chain_length: 64
  record_step_events: true
app:
  name: chainflow-tests
"""


@pytest.fixture
def engine_config_local_yaml() -> str:
    """YAML de override local: muda apenas a política de abort."""
    return """\
engine:
  abort_policy: return
"""


# =====================================================
# Pipeline fixtures
# =====================================================

class _Recorder:
    """Registra as chamadas dos callbacks de ciclo de vida e dos Steps."""

    def __init__(self):
        self.trace = []
        self.success = []
        self.aborted = []
        self.errors = []

    def on_success(self, value):
        self.success.append(value)

    def on_abort(self, value):
        self.aborted.append(value)

    def on_error(self, value, exc):
        self.errors.append((value, exc))

    def attach(self, pipeline):
        return (
            pipeline.with_success_callback(self.on_success)
            .with_abort_callback(self.on_abort)
            .with_error_callback(self.on_error)
        )


@pytest.fixture
def recorder():
    """
    Gravador de callbacks e efeitos colaterais de Steps.

    `recorder.attach(pipeline)` registra os três callbacks e devolve o
    pipeline, permitindo encadeamento fluente.
    """
    return _Recorder()


@pytest.fixture
def increment(recorder):
    """
    Fábrica de Steps que registram `(label, value)` em `recorder.trace`
    e avançam a cadeia com `value + 1`.
    """
    def _make(label):
        def _step(value, next):
            recorder.trace.append((label, value))
            next(value + 1)

        _step.__name__ = label
        return _step

    return _make


@pytest.fixture
def failing(recorder):
    """Fábrica de Steps que registram a chamada e levantam `exc`."""
    def _make(label, exc):
        def _step(value, next):
            recorder.trace.append((label, value))
            raise exc

        _step.__name__ = label
        return _step

    return _make


@pytest.fixture
def never():
    from chainflow.core.pipeline.cancellation import NEVER_CANCELLED

    return NEVER_CANCELLED


@pytest.fixture
def token():
    from chainflow.core.pipeline.cancellation import CancellationToken

    return CancellationToken()

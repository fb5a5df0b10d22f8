# src/chainflow/core/__init__.py
"""
Core do ChainFlow.

Pacotes:
    - config       → carregamento, merge, hashing e settings do engine
    - pipeline     → Steps, cancelamento, Pipeline e composição
    - traceability → Event Log estruturado de execução

Módulos:
    - exceptions → exceções tipadas (aborto, reuso, configuração)
    - errors     → payload serializável de erro para o Event Log

O core não depende de UI, serviços externos ou frameworks de logging.
"""

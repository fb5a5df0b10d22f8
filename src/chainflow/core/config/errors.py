"""
Exceções da camada de configuração.

Todas herdam de `ConfigError`. São levantadas antes de qualquer Pipeline
existir e nunca se confundem com falhas de Step ou com aborto.
"""


class ConfigError(Exception):
    """Base para falhas ao ler ou combinar arquivos de configuração."""


class DefaultsNotFoundError(ConfigError):
    """O arquivo de defaults não existe; nada é criado no lugar dele."""


class UnsupportedConfigFormatError(ConfigError):
    """Extensão sem parser: apenas .yaml, .yml e .json são aceitas."""


class ConfigParseError(ConfigError):
    """YAML ou JSON malformado. A exceção do parser fica em `__cause__`."""


class InvalidConfigRootTypeError(ConfigError):
    pass


class ConfigTypeConflictError(ConfigError):
    """
    Um override muda o tipo de uma chave existente, por exemplo
    `engine: {abort_policy: raise}` sobrescrito por `engine: return`.

    Nenhum resultado parcial é produzido.
    """

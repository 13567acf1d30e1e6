# src/metaconfig/core/config/__init__.py

"""
Camada de configuração do metaconfig.

Este pacote contém as estruturas e utilitários responsáveis por dividir,
rotear, montar e finalizar a configuração de um cluster a partir de um
texto YAML multi-documento.

Responsabilidades do pacote:
    - Divisão de texto multi-documento (splitter)
    - Roteamento de documentos classificados para slots (assembler)
    - Finalização do agregado com verificações entre slots
    - Hierarquia canônica de exceções da ingestão
    - Hashing canônico do agregado

Invariantes:
    - O agregado final (MetaConfig) é imutável
    - A mesma entrada sempre produz o mesmo agregado
    - Inconsistências entre slots são tratadas como erro

Limites explícitos:
    - Não valida documentos (ver `metaconfig.core.schema`)
    - Não acessa o cluster (ver `metaconfig.core.remote`)
"""

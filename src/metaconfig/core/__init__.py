# src/metaconfig/core/__init__.py
"""
Core do metaconfig.

Componentes principais:
    - config   → divisão, roteamento, montagem e finalização do MetaConfig
    - schema   → fontes de schemas, validação estrutural e SchemaStore
    - remote   → leitura do MetaConfig persistido no cluster
    - retry    → loop de tentativas (ruidoso / silencioso)
    - settings → settings do próprio core (defaults + override local)

Limites explícitos:
    - Não altera estado do cluster
    - Não interpreta argumentos de linha de comando
    - Não orquestra bootstrap, terraform ou convergência
"""

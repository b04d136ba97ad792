"""Connectors por canal: adapters de borda para webhooks externos.

Estrutura:
- instagram/: webhooks de change notifications do Instagram (Meta)

Cada canal tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []

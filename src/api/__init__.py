"""API: camada de borda e adapters de canais.

Responsabilidades:
- Receber webhooks de canais externos
- Validar assinaturas e payloads
- Normalizar dados para modelos internos

Subpastas:
- connectors/: adapters de webhook por canal (assinatura, parse, challenge)
- normalizers/: conversão de payloads externos → modelos internos
- routes/: endpoints HTTP
"""

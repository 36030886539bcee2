"""App: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (settings -> AppContainer)
- domain/: regras puras de correção e modelo de veredito
- services/: pipeline de validação
- use_cases/: processamento de eventos HubSpot
- infra/: implementações concretas de IO (stores, HTTP, CRM)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em log

Padrão: app executa; api adapta; utils apoia.
"""

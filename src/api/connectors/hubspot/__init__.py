"""Conector HubSpot: assinatura e parsing de webhooks."""

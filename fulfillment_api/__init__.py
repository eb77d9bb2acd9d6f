"""Webhook de fulfillment de humedad de suelo.

Atiende Dialogflow y Google Smart Home (SYNC/QUERY) sobre la misma
lectura de humedad almacenada en Firebase / Redis.
"""

__version__ = "1.0.0"

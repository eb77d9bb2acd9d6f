"""Jerarquía de excepciones del webhook de fulfillment."""

from __future__ import annotations


class FulfillmentError(Exception):
    """Base exception for all webhook errors."""


class StoreConfigError(FulfillmentError):
    """Backend de almacenamiento mal configurado (se detecta al arrancar)."""


class StoreUnavailable(FulfillmentError):
    """La lectura contra el store falló (red, credenciales, caída)."""

    def __init__(self, message: str, *, path: str = "", backend: str = "") -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)


class MalformedRequest(FulfillmentError):
    """El body no corresponde a ninguna variante de protocolo conocida."""


class OAuthError(FulfillmentError):
    """Base de errores del flujo de account linking."""

    error_code = "invalid_request"


class InvalidGrant(OAuthError):
    """Código o refresh token inválido, expirado o de otro cliente."""

    error_code = "invalid_grant"


class UnsupportedGrantType(OAuthError):
    """grant_type distinto de authorization_code / refresh_token."""

    error_code = "unsupported_grant_type"

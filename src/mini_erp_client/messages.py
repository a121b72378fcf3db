from __future__ import annotations

from dataclasses import dataclass

INVALID_CREDENTIALS = "invalid_credentials"
SERVER_ERROR = "server_error"
NETWORK_ERROR = "network_error"
CREATE_FAILED = "create_failed"
UPDATE_FAILED = "update_failed"
UNEXPECTED_ERROR = "unexpected_error"
CONFIRM_DELETE = "confirm_delete"

_CATALOG: dict[str, dict[str, str]] = {
    "en": {
        INVALID_CREDENTIALS: "Invalid username or password",
        SERVER_ERROR: "Server error",
        NETWORK_ERROR: "The server could not be reached",
        CREATE_FAILED: "Failed to add the product",
        UPDATE_FAILED: "Failed to update the product",
        UNEXPECTED_ERROR: "Unexpected error",
        CONFIRM_DELETE: "Are you sure you want to delete this product?",
    },
    "de": {
        INVALID_CREDENTIALS: "Ungültiger Benutzername oder Passwort",
        SERVER_ERROR: "Serverfehler",
        NETWORK_ERROR: "Der Server ist nicht erreichbar",
        CREATE_FAILED: "Fehler beim Hinzufügen des Produkts",
        UPDATE_FAILED: "Fehler beim Aktualisieren des Produkts",
        UNEXPECTED_ERROR: "Unerwarteter Fehler",
        CONFIRM_DELETE: "Möchten Sie dieses Produkt wirklich löschen?",
    },
    "ru": {
        INVALID_CREDENTIALS: "Неверный логин или пароль",
        SERVER_ERROR: "Ошибка сервера",
        NETWORK_ERROR: "Сервер недоступен",
        CREATE_FAILED: "Ошибка при добавлении",
        UPDATE_FAILED: "Ошибка при обновлении",
        UNEXPECTED_ERROR: "Непредвиденная ошибка",
        CONFIRM_DELETE: "Вы уверены, что хотите удалить этот продукт?",
    },
}


@dataclass(frozen=True)
class Messages:
    locale: str = "en"

    def get(self, key: str) -> str:
        table = _CATALOG.get(self.locale, _CATALOG["en"])
        return table.get(key) or _CATALOG["en"][key]

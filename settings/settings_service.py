from settings.company_settings import CompanySettings, PAYMENT_MODES
from store.record_store import SETTINGS
from src.exceptions import ValidationError
from src.money import to_int
from src.logger import get_logger

logger = get_logger("SettingsService")

class SettingsService:
    @staticmethod
    def get_settings(store):
        return CompanySettings.from_dict(store.get(SETTINGS, {}))

    @staticmethod
    def update_settings(store, data):
        """
        Merge the supplied fields into the stored settings.
        Fields not in data keep their stored value, so a form saved after
        an invoice was settled cannot roll the invoice counter back.
        """
        data = {k: v for k, v in (data or {}).items() if k in CompanySettings.FIELDS}
        with store.transaction():
            current = SettingsService.get_settings(store)

            if "current_invoice" in data:
                requested = to_int(data["current_invoice"], -1)
                if requested < current.current_invoice:
                    raise ValidationError(
                        f"Invoice counter cannot go back from {current.current_invoice} to {data['current_invoice']}"
                    )
            if data.get("default_payment_mode") and data["default_payment_mode"] not in PAYMENT_MODES:
                raise ValidationError(f"Payment mode must be one of {', '.join(PAYMENT_MODES)}")

            settings = CompanySettings.from_dict({**current.to_dict(), **data})
            store.set(SETTINGS, settings.to_dict())
        logger.info("Settings updated: %s", ", ".join(sorted(data)) or "no fields")
        return settings

    @staticmethod
    def advance_invoice_counter(store):
        """Increment the running invoice number by one and persist it."""
        settings = SettingsService.get_settings(store)
        settings.current_invoice += 1
        store.set(SETTINGS, {**store.get(SETTINGS, {}), "current_invoice": settings.current_invoice})
        return settings.current_invoice

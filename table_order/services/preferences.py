from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from table_order.core.config import CURRENCY_PREFERENCE_KEY, LANGUAGE_PREFERENCE_KEY
from table_order.models.preference import Preference

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class PreferenceService:
    """Key-value persistence for the language and currency preferences.

    Storage problems never reach the caller: reads fall back to ``None``
    and failed writes are logged.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self._session_factory()
        try:
            row = db.query(Preference).filter(Preference.key == key).first()
            return row.value if row else None
        except SQLAlchemyError:
            logger.warning("could not read preference key=%s", key, exc_info=True)
            return None
        finally:
            db.close()

    def set_many(self, values: Dict[str, str]) -> bool:
        db = self._session_factory()
        try:
            for key, value in values.items():
                row = db.query(Preference).filter(Preference.key == key).first()
                if row is None:
                    db.add(Preference(key=key, value=value))
                else:
                    row.value = value
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.warning("could not persist preferences keys=%s", ",".join(sorted(values)), exc_info=True)
            return False
        finally:
            db.close()

    def load_locale(self) -> tuple[Optional[str], Optional[str]]:
        return self.get(LANGUAGE_PREFERENCE_KEY), self.get(CURRENCY_PREFERENCE_KEY)

    def save_locale(self, language: str, currency: str) -> bool:
        return self.set_many({LANGUAGE_PREFERENCE_KEY: language, CURRENCY_PREFERENCE_KEY: currency})

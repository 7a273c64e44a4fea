"""
Lazy, time-gated purge of purchased shopping list entries.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from household_hub.models.setting import AppSetting
from household_hub.models.shopping_list import ShoppingListEntry

logger = logging.getLogger(__name__)

LAST_CLEANUP_SETTING = "shopping_list_last_cleanup_at"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored ISO timestamp; None when absent or unparseable. Naive values are UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class PurchasedItemJanitor:
    """
    Deletes purchased entries at most once per interval.

    The timestamp read, the delete and the timestamp write share one
    transaction, so a delete never observes a half-committed set.
    """

    def __init__(
        self,
        interval: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.interval = interval
        self.clock = clock

    def is_due(self, last_run: Optional[datetime], now: datetime) -> bool:
        return last_run is None or (now - last_run) >= self.interval

    def run_cleanup_if_due(self, db: Session) -> bool:
        """Purge purchased entries if the interval has elapsed. Returns True if it ran."""
        now = self.clock()
        try:
            setting = (
                db.query(AppSetting)
                .filter(AppSetting.key == LAST_CLEANUP_SETTING)
                .with_for_update()
                .first()
            )
            last_run = parse_timestamp(setting.value if setting else None)
            if not self.is_due(last_run, now):
                db.commit()
                return False

            deleted = (
                db.query(ShoppingListEntry)
                .filter(ShoppingListEntry.purchased == 1)
                .delete(synchronize_session=False)
            )
            if setting is None:
                db.add(AppSetting(key=LAST_CLEANUP_SETTING, value=now.isoformat()))
            else:
                setting.value = now.isoformat()
            db.commit()
        except IntegrityError:
            # Another request inserted the timestamp row first and did the purge.
            db.rollback()
            logger.info("Purchased-item cleanup already run by a concurrent request")
            return False
        except SQLAlchemyError:
            db.rollback()
            raise

        logger.info(f"Purchased-item cleanup removed {deleted} entries")
        return True

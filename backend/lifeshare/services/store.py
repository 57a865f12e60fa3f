"""
store.py — In-Memory Entity Store for Users and Donations

Purpose:
- Hold User and Donation records in two keyed collections, each with its own
  monotonically increasing id sequence (both start at 1, ids are never reused).
- Keep secondary indexes (username → id, email → id) so lookups are O(1) and
  uniqueness can be enforced here rather than trusted to callers.
- Record a donation and move its owner's `last_donation` in one critical
  section (`record_donation`).

Key Notes:
- Storage is volatile: nothing is written to disk.
- One RLock guards both collections and both indexes. Reads take it too, and
  always return new lists, so a caller never iterates a dict that a writer is
  resizing.
- Records are frozen dataclasses. Updating `last_donation` swaps in a new
  User object; lists already handed out keep the old one.
- Lookups signal "not found" with None. Violations raise StoreError subclasses.

This module does NOT:
- Hash passwords or check credentials (core/security.py).
- Filter or rank donors (services/query.py).
"""

from __future__ import annotations

import datetime
import threading
from dataclasses import asdict, replace
from typing import Dict, List, Optional

from lifeshare.core.logging import get_logger
from lifeshare.models.donation import Donation, NewDonation
from lifeshare.models.user import NewUser, User

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class StoreError(Exception):
    """Base class for errors raised by EntityStore."""
    pass


class ConflictError(StoreError):
    """Raised when a create would break a uniqueness constraint."""
    pass


class DuplicateUsernameError(ConflictError):
    def __init__(self, username: str):
        super().__init__(f"Username already taken: {username}")
        self.username = username


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class UnknownUserError(StoreError):
    """Raised when an operation references a user id that does not exist."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} does not exist")
        self.user_id = user_id


class InvalidDonationDateError(StoreError):
    """Raised when a donation is dated after the day it is recorded."""

    def __init__(self, donation_date: datetime.date, today: datetime.date):
        super().__init__(
            f"Donation date {donation_date.isoformat()} is in the future (today is {today.isoformat()})"
        )
        self.donation_date = donation_date
        self.today = today


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------

class EntityStore:
    """
    Keyed in-memory storage for User and Donation records.

    Create one per application (see main.create_app) or per test; there is
    no module-level instance.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

        self._users: Dict[int, User] = {}
        self._donations: Dict[int, Donation] = {}
        self._user_current_id = 1
        self._donation_current_id = 1

        # Secondary indexes, kept in step with _users under _lock
        self._user_id_by_username: Dict[str, int] = {}
        self._user_id_by_email: Dict[str, int] = {}

    # -------------------------------------------------------------------------
    # User operations
    # -------------------------------------------------------------------------

    def create_user(self, new_user: NewUser) -> User:
        """
        Assign the next user id, stamp created_at and store the record.

        Raises:
            DuplicateUsernameError: username already belongs to another user
            DuplicateEmailError: email already belongs to another user
        """
        with self._lock:
            if new_user.username in self._user_id_by_username:
                raise DuplicateUsernameError(new_user.username)
            if new_user.email in self._user_id_by_email:
                raise DuplicateEmailError(new_user.email)

            user_id = self._user_current_id
            self._user_current_id += 1

            user = User(
                id=user_id,
                created_at=datetime.datetime.now(datetime.timezone.utc),
                **asdict(new_user),
            )
            self._users[user_id] = user
            self._user_id_by_username[user.username] = user_id
            self._user_id_by_email[user.email] = user_id

        logger.info("Created user %s (id=%s)", user.username, user.id)
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            user_id = self._user_id_by_username.get(username)
            return self._users.get(user_id) if user_id is not None else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._user_id_by_email.get(email)
            return self._users.get(user_id) if user_id is not None else None

    def get_all_users(self) -> List[User]:
        """All users in insertion order (dicts keep it)."""
        with self._lock:
            return list(self._users.values())

    def update_last_donation(self, user_id: int, last_donation: Optional[datetime.date]) -> User:
        """
        Overwrite a user's last_donation and return the updated record.

        This is a plain setter; `record_donation` is the operation that
        decides whether a new donation should move the date.

        Raises:
            UnknownUserError: no user with this id
        """
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise UnknownUserError(user_id)
            updated = replace(user, last_donation=last_donation)
            self._users[user_id] = updated
            return updated

    # -------------------------------------------------------------------------
    # Donation operations
    # -------------------------------------------------------------------------

    def create_donation(self, new_donation: NewDonation) -> Donation:
        """
        Assign the next donation id and store the record.

        No ownership check is made and the owner's last_donation is left
        alone; use `record_donation` for both.
        """
        with self._lock:
            donation_id = self._donation_current_id
            self._donation_current_id += 1

            donation = Donation(id=donation_id, **asdict(new_donation))
            self._donations[donation_id] = donation

        logger.debug("Created donation %s for user %s", donation.id, donation.user_id)
        return donation

    def record_donation(self, new_donation: NewDonation, today: Optional[datetime.date] = None) -> Donation:
        """
        Create a donation for an existing user and update that user's
        last_donation, as a single step.

        Policy:
        - A donation dated after `today` is rejected.
        - Back-dated donations are stored, but last_donation only moves
          forward: it becomes max(previous, donation_date).

        Raises:
            UnknownUserError: user_id does not reference a stored user
            InvalidDonationDateError: donation_date is after today
        """
        today = today or datetime.date.today()

        with self._lock:
            user = self._users.get(new_donation.user_id)
            if user is None:
                raise UnknownUserError(new_donation.user_id)
            if new_donation.donation_date > today:
                raise InvalidDonationDateError(new_donation.donation_date, today)

            donation = self.create_donation(new_donation)

            if user.last_donation is None or new_donation.donation_date > user.last_donation:
                self.update_last_donation(user.id, new_donation.donation_date)

        logger.info(
            "Recorded donation %s for user %s on %s",
            donation.id,
            donation.user_id,
            donation.donation_date.isoformat(),
        )
        return donation

    def get_donations_by_user_id(self, user_id: int) -> List[Donation]:
        with self._lock:
            return [d for d in self._donations.values() if d.user_id == user_id]

"""
Custom exceptions for the booking engine.
Raised in engine.py / store.py and caught in views.py, where `code` becomes
the machine-readable part of the JSON error body.
"""


class BookingEngineError(Exception):
    """Base exception for all booking engine errors."""
    code = 'booking_error'


class IncompleteSelectionError(BookingEngineError):
    """Raised when the date or the time of day was not selected."""
    code = 'incomplete_selection'


class InvalidSlotError(BookingEngineError):
    """Raised when the time label is malformed or not on the barbershop's grid."""
    code = 'invalid_slot'


class PastSlotError(BookingEngineError):
    """Raised when the selected instant is not strictly in the future."""
    code = 'past_slot'


class SlotTakenError(BookingEngineError):
    """Raised when a CONFIRMED booking already holds the requested instant."""
    code = 'slot_taken'


class SlotConflictError(SlotTakenError):
    """
    Raised when the database uniqueness constraint rejects an insert that
    passed the optimistic check (two customers raced for the same slot).
    """
    code = 'slot_conflict'


class BookingNotFoundError(BookingEngineError):
    code = 'not_found'


class BookingForbiddenError(BookingEngineError):
    """Raised when a customer acts on a booking they do not own."""
    code = 'forbidden'


class BookingAlreadyFinishedError(BookingEngineError):
    """Raised when cancelling a booking whose instant has already passed."""
    code = 'already_finished'


class InvalidTransitionError(BookingEngineError):
    code = 'invalid_transition'

from courtbook.models.booking import BookingRecord

__all__ = ["BookingRecord"]

from boxoffice.models.holder import Holder
from boxoffice.models.show import Show
from boxoffice.models.reservation import Reservation

__all__ = ["Holder", "Show", "Reservation"]

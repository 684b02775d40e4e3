from dataclasses import dataclass


@dataclass
class CancellationToken:
    """Cooperative cancellation flag, checked once when a resolution starts."""

    is_cancellation_requested: bool = False

    def cancel(self) -> None:
        self.is_cancellation_requested = True

"""Per-job stage timeline used for diagnostics and failure logging."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .models import JobState


class JobTimeline:
    """Ordered record of state transitions for one job.

    The orchestrator appends one event per transition. The last recorded
    state is the job's current state.
    """

    def __init__(self, job_id: str):
        self._job_id = job_id
        self._events: list[dict[str, object]] = []
        self._state = JobState.RECEIVED
        self.timeline_record(JobState.RECEIVED)

    @property
    def job_id(self) -> str:
        return self._job_id

    @property
    def state(self) -> JobState:
        """Return the most recently recorded state."""

        return self._state

    def timeline_record(self, state: JobState, details: dict[str, Any] | None = None) -> None:
        """Append one structured transition event.

        Args:
            state: State being entered.
            details: Optional structured details object.

        Returns:
            None: Timeline is updated as side effect.

        Raises:
            ValueError: Raised when a transition leaves a terminal state.
        """

        if self._events and self._state in (JobState.DONE, JobState.FAILED):
            raise ValueError(f"job {self._job_id} already finished in state={self._state.value}")

        event_payload: dict[str, object] = {
            "stage": state.value,
            "status": "failed" if state is JobState.FAILED else "completed",
            "at_utc": datetime.now(timezone.utc).isoformat(),
        }
        if details is not None:
            event_payload["details"] = details
        self._events.append(event_payload)
        self._state = state

    def timeline_events(self) -> list[dict[str, object]]:
        """Return a copy of the recorded events."""

        return list(self._events)

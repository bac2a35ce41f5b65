"""Run lifecycle package.

Module split:
    - `polling`: `PollPolicy`, the backoff schedule between polls.
    - `lifecycle`: `RunController`, which creates, polls, submits tool outputs
      for, and cancels runs.
"""

from assistantkit.runs.lifecycle import RunController
from assistantkit.runs.polling import PollPolicy

__all__ = ["PollPolicy", "RunController"]

"""Run lifecycle controller.

Processing flow:
    1. Create a run from a `RunBuilder` (`POST threads/{id}/runs` or
       `POST threads/runs`).
    2. Poll `GET threads/{thread_id}/runs/{run_id}` until a terminal status;
       each poll replaces the held snapshot with the fresh one.
    3. When the run requires action, hand the pending tool calls to the
       caller and submit the returned outputs
       (`POST threads/{thread_id}/runs/{run_id}/submit_tool_outputs`).
    4. Optionally cancel (`POST .../cancel`) and keep polling until the
       service reports `cancelled`.

Concurrency model:
    Everything runs on the caller's thread with blocking HTTP and blocking
    sleeps. The controller keeps no state between calls; each poll is an
    independent read. Stopping a polling loop early is the caller's choice,
    expressed as a `timeout` and/or a `threading.Event`.

Error handling strategy:
    - Failed and expired runs are returned as data (`last_error` carries the
      coded reason); they are never retried.
    - Transport and deserialization errors propagate unchanged and are never
      folded into a run status.
    - Misuse detected locally (submitting outputs for a run that does not
      require action, cancelling a finished run) raises `RestrictedValueError`
      before any request is sent.
    - A successful fetch that breaks an expected invariant (a run whose thread
      has no messages) raises `OperationalError`.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterator, Mapping

from assistantkit.builders.listing import list_params
from assistantkit.builders.run import RunBuilder
from assistantkit.core.errors import OperationalError, PollingStopped, RestrictedValueError
from assistantkit.core.identifiers import IdentifierLike, get_identifier
from assistantkit.runs.polling import PollPolicy
from assistantkit.types.common import ApiList
from assistantkit.types.message import Message
from assistantkit.types.run import Run, RunStep

logger = logging.getLogger(__name__)

ToolOutputHandler = Callable[[Run], Mapping[str, str]]


class RunController:
    """Creates, polls, drives and cancels runs through a `Networking` transport."""

    def __init__(self, networking):
        self.networking = networking

    # ============================================================
    # Single-request primitives
    # ============================================================

    def create(self, run_builder: RunBuilder) -> Run:
        """Send the builder's create request and return the first snapshot."""
        run = run_builder.build(self.networking)
        logger.info("Created run %s on thread %s (%s)", run.id, run.thread_id, run.status.value)
        return run

    def retrieve(self, thread: IdentifierLike, run: IdentifierLike) -> Run:
        return self.networking.retrieve_run(get_identifier(thread), get_identifier(run))

    def poll(self, run: Run) -> Run:
        """Re-fetch `run` and return the fresh snapshot. Read-only."""
        return self.networking.retrieve_run(run.thread_id, run.id)

    def list_runs(
        self,
        thread: IdentifierLike,
        limit: int | None = None,
        order: str | None = None,
        after: IdentifierLike | None = None,
        before: IdentifierLike | None = None,
    ) -> ApiList[Run]:
        return self.networking.list_runs(
            get_identifier(thread), list_params(limit, order, after, before)
        )

    def retrieve_step(self, run: Run, step: IdentifierLike) -> RunStep:
        return self.networking.retrieve_run_step(run.thread_id, run.id, get_identifier(step))

    def list_steps(
        self,
        run: Run,
        limit: int | None = None,
        order: str | None = None,
        after: IdentifierLike | None = None,
        before: IdentifierLike | None = None,
    ) -> ApiList[RunStep]:
        return self.networking.list_run_steps(
            run.thread_id, run.id, list_params(limit, order, after, before)
        )

    def submit_tool_outputs(self, run: Run, outputs: Mapping[str, str]) -> Run:
        """Submit `{tool_call_id: output}` for a run that requires action.

        Args:
            run: Snapshot in `requires_action` status.
            outputs: Mapping from every pending tool call id to its output string.

        Returns:
            The run snapshot returned by the service. It stays non-terminal
            until the service processes the outputs; keep polling.

        Raises:
            RestrictedValueError: The snapshot does not require action, or the
                mapping names unknown tool calls, misses pending ones, or holds
                non-string outputs.
        """
        if not run.requires_action():
            raise RestrictedValueError(
                f"Run {run.id} is {run.status.value}; tool outputs are only accepted in requires_action"
            )

        outputs = dict(outputs)
        pending = run.pending_tool_calls()
        pending_ids = {call.id for call in pending}

        unknown = sorted(set(outputs) - pending_ids)
        if unknown:
            raise RestrictedValueError(f"Unknown tool call ids: {', '.join(unknown)}")
        missing = sorted(pending_ids - set(outputs))
        if missing:
            raise RestrictedValueError(f"Missing outputs for tool call ids: {', '.join(missing)}")
        for tool_call_id, output in outputs.items():
            if not isinstance(output, str):
                raise RestrictedValueError(f"Output for {tool_call_id} must be a string")

        tool_outputs = [
            {"tool_call_id": call.id, "output": outputs[call.id]}
            for call in pending
        ]
        logger.info("Submitting %d tool output(s) for run %s", len(tool_outputs), run.id)
        return self.networking.submit_tool_outputs(run.thread_id, run.id, tool_outputs)

    def cancel(self, run: Run) -> Run:
        """Request cancellation of a run that has not finished yet.

        Args:
            run: Latest known snapshot of the run.

        Returns:
            The snapshot returned by the service, usually `cancelling`; keep
            polling for `cancelled`.

        Raises:
            RestrictedValueError: The snapshot is already terminal.
        """
        if run.is_terminal():
            raise RestrictedValueError(f"Run {run.id} is already {run.status.value}")
        cancelled = self.networking.cancel_run(run.thread_id, run.id)
        logger.info("Cancellation requested for run %s (%s)", cancelled.id, cancelled.status.value)
        return cancelled

    def retrieve_first_message(self, run: Run) -> Message:
        """Return the first message listed on the run's thread.

        Raises:
            OperationalError: The thread has no messages.
        """
        messages = self.networking.list_messages(run.thread_id)
        if not messages.data:
            raise OperationalError(f"Run {run.id} contains no messages")
        return messages.data[0]

    # ============================================================
    # Polling loops
    # ============================================================

    def iter_snapshots(
        self,
        run: Run,
        policy: PollPolicy | None = None,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> Iterator[Run]:
        """Yield successive snapshots of `run` until one is terminal.

        A delay from `policy` is waited before every poll. The generator stops
        right after yielding a terminal snapshot and never polls again.

        Args:
            run: Snapshot to start from. Nothing is yielded if it is terminal.
            policy: `PollPolicy`; defaults to 1s growing to 10s.
            timeout: Overall budget in seconds, measured with `clock`.
            cancel_event: `threading.Event`; when given, waits use
                `cancel_event.wait` instead of `sleep` so setting the event
                interrupts the wait.
            sleep: Blocking sleep used when no `cancel_event` is given.
            clock: Monotonic clock used for the deadline.

        Raises:
            PollingStopped: Deadline reached or `cancel_event` set; carries
                the last snapshot.
        """
        deadline = None if timeout is None else clock() + timeout
        return self._snapshots(run, policy or PollPolicy(), deadline, cancel_event, sleep, clock)

    def _snapshots(self, run, policy, deadline, cancel_event, sleep, clock):
        current = run

        for delay in policy.intervals():
            if current.is_terminal():
                return

            if cancel_event is not None and cancel_event.is_set():
                raise PollingStopped("cancelled", current)
            if deadline is not None:
                remaining = deadline - clock()
                if remaining <= 0:
                    raise PollingStopped("timeout", current)
                delay = min(delay, remaining)

            if cancel_event is not None:
                if cancel_event.wait(delay):
                    raise PollingStopped("cancelled", current)
            else:
                sleep(delay)

            previous = current
            current = self.poll(current)
            if current.status != previous.status:
                logger.info(
                    "Run %s: %s -> %s", current.id, previous.status.value, current.status.value
                )
            yield current

    def await_terminal(
        self,
        run: Run,
        policy: PollPolicy | None = None,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
        on_requires_action: ToolOutputHandler | None = None,
        stop_on_requires_action: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> Run:
        """Poll `run` until it reaches a terminal status and return that snapshot.

        Requires-action handling:
            - With `on_requires_action`, the callable receives the snapshot and
              returns `{tool_call_id: output}`; the outputs are submitted once
              per distinct set of pending tool calls and polling continues
              from the snapshot the submission returned.
            - With `stop_on_requires_action`, the requires-action snapshot is
              returned so the caller can submit outputs itself.
            - Otherwise polling continues and a warning is logged; the service
              eventually expires runs that never receive outputs.

        Other arguments behave as in `iter_snapshots`; `timeout` covers the
        whole wait, submissions included.

        Returns:
            Terminal snapshot (completed, failed, cancelled or expired), or the
            requires-action snapshot when `stop_on_requires_action` is set.

        Raises:
            PollingStopped: Deadline reached or `cancel_event` set; carries
                the latest snapshot, including one returned by a submission.
        """
        policy = policy or PollPolicy()
        deadline = None if timeout is None else clock() + timeout
        snapshots = self._snapshots(run, policy, deadline, cancel_event, sleep, clock)
        current = run
        submitted = set()
        warned = False

        while not current.is_terminal():
            if current.requires_action():
                pending_ids = frozenset(call.id for call in current.pending_tool_calls())
                if stop_on_requires_action:
                    return current
                if on_requires_action is not None:
                    if pending_ids not in submitted:
                        current = self.submit_tool_outputs(current, on_requires_action(current))
                        submitted.add(pending_ids)
                        snapshots = self._snapshots(
                            current, policy, deadline, cancel_event, sleep, clock
                        )
                        continue
                elif not warned:
                    logger.warning(
                        "Run %s requires action but no handler was supplied; still polling",
                        current.id,
                    )
                    warned = True
            current = next(snapshots)

        return current

    def cancel_and_wait(self, run: Run, **kwargs) -> Run:
        """Cancel `run` and poll until the service reports a terminal status.

        Keyword arguments are passed to `await_terminal`.
        """
        return self.await_terminal(self.cancel(run), **kwargs)

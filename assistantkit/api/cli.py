"""
Command-line adapter for assistantkit.

Architectural role:
- Exposes a handful of client operations to the terminal.
- Delegates all service work to `OpenAIClient` and `RunController`.

Commands:
- `models`: list the model ids visible to the key.
- `run --assistant ID [--thread ID] [--message TEXT] [--instructions TEXT] [--timeout S]`:
  create a run and print every status until it is terminal.
- `cancel THREAD RUN`: request cancellation and wait for the final status.

Credential handling:
- Key resolved from `OPENAI_API_KEY`, then the key file.
- Falls back to an interactive `getpass` prompt. This is the only place in
  the package that prompts.

Error handling strategy:
- Library errors are printed as one line and mapped to exit code 1.
- Anything else is logged with its traceback and mapped to exit code 1.
- Keyboard interrupts terminate without traceback output (exit code 130).

Side effects:
- Network calls against the configured endpoint.
- Writes to stdout/stderr.
"""

import argparse
import getpass
import logging
import os
import sys

from assistantkit.builders.run import RunBuilder
from assistantkit.builders.thread import MessageBuilder, ThreadBuilder
from assistantkit.core.client import OpenAIClient
from assistantkit.core.errors import OpenApiError, PollingStopped
from assistantkit.networking.config import ClientSettings, ORGANIZATION_ENV, load_key

logger = logging.getLogger(__name__)


# =========================================================
# CLIENT SETUP
# =========================================================

def resolve_settings(key_file=None):
    """Build `ClientSettings` from the environment, prompting for a missing key."""
    if load_key(key_file):
        return ClientSettings.from_env(key_file=key_file)

    api_key = getpass.getpass("OpenAI API key: ").strip()
    return ClientSettings(
        api_key=api_key,
        organization_id=os.getenv(ORGANIZATION_ENV) or None,
    )


# =========================================================
# COMMANDS
# =========================================================

def cmd_models(client, args):
    for model in client.list_models():
        print(model.id)
    return 0


def cmd_run(client, args):
    builder = RunBuilder(args.assistant, args.thread)
    if args.message:
        if args.thread:
            MessageBuilder(args.thread, args.message).build(client.networking)
        else:
            builder.with_thread(ThreadBuilder().add_message(args.message))
    if args.instructions:
        builder.with_instructions(args.instructions)

    run = client.runs.create(builder)
    print(f"{run.id} {run.status.value}")

    try:
        for snapshot in client.runs.iter_snapshots(run, timeout=args.timeout):
            print(f"{snapshot.id} {snapshot.status.value}")
            run = snapshot
    except PollingStopped as stopped:
        print(f"Stopped waiting ({stopped.reason}); last status {stopped.run.status.value}")
        return 1

    if run.last_error is not None:
        print(f"{run.last_error.code.value}: {run.last_error.message}")
    if run.is_complete():
        message = client.runs.retrieve_first_message(run)
        print(message.text())
        return 0
    return 1


def cmd_cancel(client, args):
    run = client.retrieve_run(args.thread, args.run)
    final = client.runs.cancel_and_wait(run, timeout=args.timeout)
    print(f"{final.id} {final.status.value}")
    return 0


# =========================================================
# MAIN
# =========================================================

def build_parser():
    parser = argparse.ArgumentParser(prog="assistantkit")
    parser.add_argument("--key-file", default=None, help="API key file (default: config/openai.key)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    models = sub.add_parser("models", help="List available models")
    models.set_defaults(func=cmd_models)

    run = sub.add_parser("run", help="Create a run and wait for it to finish")
    run.add_argument("--assistant", required=True)
    run.add_argument("--thread", default=None)
    run.add_argument("--message", default=None, help="User message added before the run")
    run.add_argument("--instructions", default=None)
    run.add_argument("--timeout", type=float, default=None)
    run.set_defaults(func=cmd_run)

    cancel = sub.add_parser("cancel", help="Cancel a run and wait for the final status")
    cancel.add_argument("thread")
    cancel.add_argument("run")
    cancel.add_argument("--timeout", type=float, default=None)
    cancel.set_defaults(func=cmd_cancel)

    return parser


def main(argv=None):
    """Parse arguments, build the client and dispatch one command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = resolve_settings(args.key_file)
        logger.debug("Using %r", settings)
        client = OpenAIClient(settings)
        return args.func(client, args)
    except OpenApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted.")
        return 130
    except Exception:
        logger.exception("Unexpected failure in %s", args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Client facade over transport, builders and the run lifecycle controller.

Architectural role:
    Entry point for applications. Resolves identifier-resolvable arguments and
    forwards each operation to `Networking`. Builders are built against
    `client.networking`; runs are driven through `client.runs`.

Configuration:
    The client takes explicit `ClientSettings`. `from_env()` is a shortcut
    that reads the environment and key file; it never prompts.

Error handling strategy:
    Errors from identifier resolution, validation and transport propagate
    unchanged (see `assistantkit.core.errors`).
"""

from assistantkit.builders.file import FileBuilder
from assistantkit.builders.listing import list_params
from assistantkit.core.errors import RestrictedValueError
from assistantkit.core.identifiers import get_identifier
from assistantkit.networking.config import ClientSettings
from assistantkit.networking.transport import Networking
from assistantkit.runs.lifecycle import RunController
from assistantkit.types.file import FilePurpose
from assistantkit.types.moderation import ModerationModel


class OpenAIClient:
    """Typed client for models, files, assistants, threads, messages and runs."""

    def __init__(self, settings, session=None, networking=None):
        self._networking = networking or Networking(settings, session=session)
        self._runs = RunController(self._networking)

    @classmethod
    def from_env(cls, organization_id=None, key_file=None):
        return cls(ClientSettings.from_env(organization_id=organization_id, key_file=key_file))

    @property
    def networking(self):
        return self._networking

    @property
    def runs(self):
        return self._runs

    # ============================================================
    # Models
    # ============================================================

    def list_models(self):
        return self._networking.list_models()

    def load_model(self, model):
        return self._networking.load_model(get_identifier(model))

    # ============================================================
    # Files
    # ============================================================

    def list_files(self):
        return self._networking.list_files()

    def upload_file(self, path, purpose=FilePurpose.ASSISTANTS):
        return FileBuilder(path, purpose).build(self._networking)

    def retrieve_file(self, file):
        return self._networking.retrieve_file(get_identifier(file))

    def delete_file(self, file):
        return self._networking.delete_file(get_identifier(file))

    def retrieve_file_content(self, file):
        return self._networking.retrieve_file_content(get_identifier(file))

    # ============================================================
    # Moderation
    # ============================================================

    def create_moderation(self, text, model=ModerationModel.LATEST):
        """Classify `text` with one of the `ModerationModel` identifiers."""
        if not isinstance(model, ModerationModel):
            raise RestrictedValueError(
                f"Moderation model must be a ModerationModel (got {model!r})"
            )
        return self._networking.create_moderation({"input": str(text), "model": model.value})

    # ============================================================
    # Assistants
    # ============================================================

    def list_assistants(self, limit=None, order=None, after=None, before=None):
        return self._networking.list_assistants(list_params(limit, order, after, before))

    def retrieve_assistant(self, assistant):
        return self._networking.retrieve_assistant(get_identifier(assistant))

    def delete_assistant(self, assistant):
        return self._networking.delete_assistant(get_identifier(assistant))

    def list_assistant_files(self, assistant, limit=None, order=None, after=None, before=None):
        return self._networking.list_assistant_files(
            get_identifier(assistant), list_params(limit, order, after, before)
        )

    def retrieve_assistant_file(self, assistant, file):
        return self._networking.retrieve_assistant_file(get_identifier(assistant), get_identifier(file))

    def delete_assistant_file(self, assistant, file):
        return self._networking.delete_assistant_file(get_identifier(assistant), get_identifier(file))

    # ============================================================
    # Threads
    # ============================================================

    def retrieve_thread(self, thread):
        return self._networking.retrieve_thread(get_identifier(thread))

    def modify_thread(self, thread, metadata):
        return self._networking.modify_thread(get_identifier(thread), metadata)

    def delete_thread(self, thread):
        return self._networking.delete_thread(get_identifier(thread))

    # ============================================================
    # Messages
    # ============================================================

    def list_messages(self, thread, limit=None, order=None, after=None, before=None):
        return self._networking.list_messages(
            get_identifier(thread), list_params(limit, order, after, before)
        )

    def retrieve_message(self, thread, message):
        return self._networking.retrieve_message(get_identifier(thread), get_identifier(message))

    def modify_message(self, thread, message, metadata):
        return self._networking.modify_message(
            get_identifier(thread), get_identifier(message), metadata
        )

    def list_message_files(self, thread, message, limit=None, order=None, after=None, before=None):
        return self._networking.list_message_files(
            get_identifier(thread),
            get_identifier(message),
            list_params(limit, order, after, before),
        )

    def retrieve_message_file(self, thread, message, file):
        return self._networking.retrieve_message_file(
            get_identifier(thread), get_identifier(message), get_identifier(file)
        )

    # ============================================================
    # Runs
    # ============================================================

    def retrieve_run(self, thread, run):
        return self._runs.retrieve(thread, run)

    def modify_run(self, thread, run, metadata):
        return self._networking.modify_run(get_identifier(thread), get_identifier(run), metadata)

    def list_runs(self, thread, limit=None, order=None, after=None, before=None):
        return self._runs.list_runs(thread, limit, order, after, before)

    def retrieve_run_step(self, thread, run, step):
        return self._networking.retrieve_run_step(
            get_identifier(thread), get_identifier(run), get_identifier(step)
        )

    def list_run_steps(self, thread, run, limit=None, order=None, after=None, before=None):
        return self._networking.list_run_steps(
            get_identifier(thread), get_identifier(run), list_params(limit, order, after, before)
        )

    def cancel_run(self, thread, run):
        """Fetch the run and request cancellation; finished runs are rejected locally."""
        return self._runs.cancel(self.retrieve_run(thread, run))

"""Core package.

Architectural role:
    Holds the pieces every other layer depends on: the error taxonomy,
    identifier resolution, and the `OpenAIClient` facade that composes
    transport, builders and the run lifecycle controller.

Composition:
    - `errors`: exception hierarchy.
    - `identifiers`: `Identifiable` protocol and `get_identifier`.
    - `client`: resource operations addressed by identifier-resolvable values.

Import note:
    `client` is not imported here so that `errors` and `identifiers` can be
    used by the lower layers without a circular import.
"""

"""
Outer interface adapters.

Scope:
- `cli`: terminal entry point (`assistantkit` console script).

Adapters only translate arguments and print results; every service call goes
through `assistantkit.core.client.OpenAIClient`.
"""

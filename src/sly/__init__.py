"""sly -- a command-line client for Sprint.ly.

sly lists products, people and items, shows and edits single items, and
keeps collection responses in a local JSON cache so repeated listings do
not hit the API.

Typical workflow::

    sly setup --email me@example.com --api-key ... --product 42
    sly items @me --status current
    sly update 1234 --status complete

Modules:
    app: Typer application and CLI entry point.
    interface: Typed, cached facade over the Sprint.ly API.
    entities: Person, Product and Item models.
    updates: Update payload builder.
    terms: Common-name / API-name dictionary.
    cache: On-disk response cache.
    client: httpx connector and response classifier.
    config: XDG-aware configuration loading and saving.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich.
"""

__version__ = "0.3.0"

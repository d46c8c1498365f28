"""easyswagger -- browse OpenAPI/Swagger endpoints and copy them as simplified JSON.

Point easyswagger at an OpenAPI 3.x or Swagger document (URL, local file, or
stdin) and it resolves every ``$ref`` into a per-endpoint, per-method view of
parameters, request bodies, and responses. The ``copy`` command reduces an
endpoint to a fill-in-the-blanks JSON template that is handy to paste into an
AI assistant.

Typical workflow::

    easyswagger paths --spec https://petstore3.swagger.io/api/v3/openapi.json
    easyswagger show /pet/{petId}
    easyswagger copy /pet | pbcopy

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and persisted session state.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    explorer: Search, grouping, and copy payloads over the endpoint map.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

"""specout -- Export OpenAPI documents from local packages or running services.

The tool loads an OpenAPI document from one of two sources, checks that it
looks like an OpenAPI document, and writes it back out as JSON or YAML with
the requested indentation.

Typical workflow::

    specout package --package ./simple-api --module app.main --format yaml
    specout url --url http://localhost:8000/openapi.json --out openapi.json

Modules:
    app: Typer application and console-script entry point.
    models: Pydantic models for options, metadata and pipeline outcomes.
    options: Option validators run before any I/O.
    sources: Document sources (local package, HTTP URL).
    document: Parsing, structural validation and formatting of documents.
    sink: Output destinations (stdout, file).
    pipeline: The stage-by-stage export pipeline.
    config: XDG-aware defaults resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr discipline with Rich support.
"""

__version__ = "0.1.0"

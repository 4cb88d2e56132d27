"""Import message builder — turns a filtered file set into the two artifacts.

The bundle is a ``boltArtifact`` block with one ``boltAction`` per file.  The
instructions message is made of optional blocks, always in this order:
template setup instructions, read-only access rules, closing directive.
"""

from __future__ import annotations

from xml.sax.saxutils import quoteattr

from starter_importer.domain.entities import FilteredFileSet, ImportResult, RepoFile

DEFAULT_BUNDLE_TITLE = "Importing Starter Files"

CLOSING_DIRECTIVE = """\
---
template import is done, and you can now use the imported files,
edit only the files that need to be changed, and you can create new files as needed.
DO NOT EDIT/WRITE ANY FILES THAT ALREADY EXIST IN THE PROJECT AND DOES NOT NEED TO BE MODIFIED
---
Now that the Template is imported please continue with my original request
"""

_SETUP_TEMPLATE = """\
TEMPLATE INSTRUCTIONS:
{content}

IMPORTANT: Dont Forget to install the dependencies before running the app
---
"""

_ACCESS_RULES_TEMPLATE = """\
STRICT FILE ACCESS RULES - READ CAREFULLY:

The following files are READ-ONLY and must never be modified:
{paths}

Permitted actions:
✓ Import these files as dependencies
✓ Read from these files
✓ Reference these files

Strictly forbidden actions:
❌ Modify any content within these files
❌ Delete these files
❌ Rename these files
❌ Move these files
❌ Create new versions of these files
❌ Suggest changes to these files

Any attempt to modify these protected files will result in immediate termination of the operation.

If you need to make changes to functionality, create new files instead of modifying the protected ones listed above.
---
"""


def _file_block(f: RepoFile) -> str:
    return f'<boltAction type="file" filePath={quoteattr(f.path)}>\n{f.content}\n</boltAction>'


def build_bundle(files: list[RepoFile], title: str | None = None) -> str:
    """Serialize every importable file into one bundled artifact."""
    header = (
        f'<boltArtifact id="imported-files" '
        f'title={quoteattr(title or DEFAULT_BUNDLE_TITLE)} type="bundled">'
    )
    parts = [header, *(_file_block(f) for f in files), "</boltArtifact>"]
    return "\n".join(parts) + "\n"


def build_instructions(
    ignored: list[RepoFile],
    prompt_content: str | None = None,
) -> str:
    """Assemble the instructions message from whichever blocks have data."""
    sections: list[str] = []

    if prompt_content:
        sections.append(_SETUP_TEMPLATE.format(content=prompt_content))

    if ignored:
        paths = "\n".join(f"- {f.path}" for f in ignored)
        sections.append(_ACCESS_RULES_TEMPLATE.format(paths=paths))

    sections.append(CLOSING_DIRECTIVE)
    return "\n".join(sections)


def build(
    filtered: FilteredFileSet,
    *,
    title: str | None = None,
    prompt_content: str | None = None,
) -> ImportResult:
    return ImportResult(
        bundled_payload=build_bundle(filtered.files, title),
        instructions=build_instructions(filtered.ignored, prompt_content),
    )


def build_error(template_name: str, error: Exception) -> ImportResult:
    """User-facing artifacts for a template that could not be imported."""
    bundle = (
        '<boltArtifact id="error-message" title="Template Import Error" type="error">\n'
        f'Failed to import template "{template_name}". Error: {error}\n'
        "</boltArtifact>\n"
    )
    message = (
        f'There was an error importing the template "{template_name}".\n'
        "The system will proceed with a minimal setup.\n"
        "Please provide more details about your design requirements "
        "so I can help implement them manually.\n"
    )
    return ImportResult(bundled_payload=bundle, instructions=message)

from pathlib import Path

from receipt_documents.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None, *, structured: bool = False) -> str:
    """Load the receipt prompt template from a file.

    Args:
        path: Path to the prompt template file. Defaults to the bundled
              receipt_prompt.txt, or receipt_prompt_structured.txt when
              ``structured`` is set.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        name = "receipt_prompt_structured.txt" if structured else "receipt_prompt.txt"
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema for structured replies.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "receipt_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load JSON schema: {exc}") from exc

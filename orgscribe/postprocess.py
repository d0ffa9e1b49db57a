"""Post-processing of transcripts into structured note documents.

Each supported directive is a member of :class:`PostProcess`. A directive maps
to a processor that turns transcript text into a document and decides where
that document lives relative to the transcript it came from. Adding a variant
means adding an enum member, a processor class, and a ``_PROCESSORS`` entry.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from openai import OpenAI

from . import storage
from .client import APIError, api_errors
from .models import COMPLETION_MAX_TOKENS, COMPLETION_MODEL, COMPLETION_TEMPERATURE

logger = logging.getLogger(__name__)

EMACS_ORG_PROMPT = """I need you to summarize the following content and convert it into an Emacs Org file format.
Please do not include any extra commentary or explanations.
Make sure the summary is detailed but concise, capturing the key points and providing enough explanation for each section. Avoid being too brief or overly terse.

The response should only contain the Emacs Org formatted output.

Use the following structure:

1. The file should have a #+title: and #+author: and #+date: header using today's date in the format like "<1999-10-04 Fri>"
2. Include a "Summary" section that gives a brief overview of the key points, try
3. Include a "Notes" section, with **subsections** that organize the content logically.

Here is the content to summarize:

{transcript}

Please format the response as a valid Emacs Org file."""


class CompletionError(APIError):
    """Raised when the chat completion request fails or returns no content."""


class PostProcess(str, Enum):
    """Post-processing directives accepted by ``-post``."""

    EMACS_ORG_NOTES = "create_emacs_org_notes"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["PostProcess"]:
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            logger.info("Unknown post-processing directive %r; skipping.", value)
            return None


class PostProcessor(Protocol):
    """Common interface for post-processing variants."""

    def process(self, text: str) -> str:
        """Return the generated document for ``text``."""

    def output_path(self, reference_path: Path) -> Path:
        """Return where the document for ``reference_path`` is written."""


class EmacsOrgNotes:
    """Summarise a transcript into an Emacs Org outline with a chat model."""

    def __init__(
        self,
        client: OpenAI,
        model: str = COMPLETION_MODEL,
        max_tokens: int = COMPLETION_MAX_TOKENS,
        temperature: float = COMPLETION_TEMPERATURE,
    ) -> None:
        self._client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @staticmethod
    def build_prompt(text: str) -> str:
        return EMACS_ORG_PROMPT.format(transcript=text)

    def request_completion(self, prompt: str) -> str:
        logger.info("Sending request to OpenAI API...")
        with api_errors("OpenAI", CompletionError):
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )

        logger.info("Parsing OpenAI API response...")
        choices = getattr(completion, "choices", None)
        if not choices:
            raise CompletionError("OpenAI response contained no choices")
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise CompletionError("OpenAI response choice has no message content")
        return content

    def process(self, text: str) -> str:
        return self.request_completion(self.build_prompt(text))

    def output_path(self, reference_path: Path) -> Path:
        return storage.notes_path(reference_path)


_PROCESSORS: Dict[PostProcess, Callable[[OpenAI], PostProcessor]] = {
    PostProcess.EMACS_ORG_NOTES: EmacsOrgNotes,
}


def get_post_processor(directive: Optional[str], client: OpenAI) -> Optional[PostProcessor]:
    """Return the processor for ``directive`` or ``None`` when there is nothing to do."""

    variant = PostProcess.parse(directive)
    if variant is None:
        return None
    return _PROCESSORS[variant](client)


def run_post_process(
    directive: Optional[str],
    text: str,
    reference_path: Path,
    client: OpenAI,
) -> Optional[Path]:
    processor = get_post_processor(directive, client)
    if processor is None:
        return None
    logger.info("Starting post-processing with %s command...", directive)
    document = processor.process(text)
    return storage.write_text(processor.output_path(reference_path), document)

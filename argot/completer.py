# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ArgotCompleter`, a Prompt Toolkit completer for Argot programs.

This completer supports:
- Command name and alias completion (plus the `help` and `version` selectors)
- Flag completion for the selected command (e.g. `--size`, `--cheese`)
- Value completion from an option's or positional's allowed values
- Quoting completions that contain spaces

Suggestions for flags and values come from `Command.suggest_next()`. When the
first token names no command, the default command is completed instead.
"""

from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from argot.parser import HELP_SELECTOR, VERSION_SELECTOR

if TYPE_CHECKING:
    from argot.program import Program


class ArgotCompleter(Completer):
    """
    Prompt Toolkit completer for an Argot program.

    Inserts the longest common prefix when several suggestions share one, and
    lists every match in the menu.

    Args:
        program (Program): The program providing commands and schemas.
    """

    def __init__(self, program: "Program"):
        self.program = program

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Compute completions for the current input.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, not used here.

        Yields:
            Completion: Completions matching the current stub text.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
            cursor_at_end_of_token = text.endswith((" ", "\t"))
        except ValueError:
            return

        stub = "" if cursor_at_end_of_token or not tokens else tokens[-1]

        if not tokens or (len(tokens) == 1 and not cursor_at_end_of_token):
            suggestions = list(self._suggest_commands(stub))
            if not stub.startswith("-") or not suggestions:
                suggestions.extend(self.program.root.suggest_next([stub] if stub else []))
            yield from self._yield_lcp_completions(sorted(set(suggestions)), stub)
            return

        command = self.program.find_command(tokens[0])
        args = tokens[1:] if command is not None else tokens
        command = command or self.program.root
        suggestions = command.suggest_next(args, cursor_at_end_of_token)
        yield from self._yield_lcp_completions(suggestions, stub)

    def _suggest_commands(self, prefix: str) -> Iterable[str]:
        """Yield command names, aliases and built-in selectors starting with `prefix`."""
        keys = []
        for command in self.program.named_commands():
            keys.append(command.name)
            keys.extend(command.aliases)
        keys.extend([HELP_SELECTOR, VERSION_SELECTOR])
        for key in keys:
            if key.startswith(prefix):
                yield key

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions: list[str], stub: str):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one match → yield it fully.
        - If multiple matches share a longer prefix → insert the prefix, but also
            display all matches in the menu.
        - If no shared prefix → list all matches individually.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )

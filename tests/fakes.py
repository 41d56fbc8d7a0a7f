"""
Fakes for the installer's external collaborators: command runner, HTTP
download and operator input.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional

from twogc_installer.console import Operator
from twogc_installer.lib.command import CmdResult

SC_SERVICE_MISSING = 1060


class FakeRunner:
    """Records argv lists; return codes and side effects keyed by argv[0]."""

    def __init__(
        self,
        returncodes: Optional[Dict[str, int]] = None,
        effects: Optional[Dict[str, Callable[[List[str]], None]]] = None,
    ):
        self.returncodes = {"sc.exe": SC_SERVICE_MISSING}
        self.returncodes.update(returncodes or {})
        self.effects = effects or {}
        self.calls: List[List[str]] = []
        self.kwargs: List[dict] = []

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        effect = self.effects.get(argv[0])
        if effect is not None:
            effect(argv)
        return CmdResult(argv=argv, returncode=self.returncodes.get(argv[0], 0), stdout="", stderr="")

    def commands(self) -> List[str]:
        return [argv[0] for argv in self.calls]


class FakeFetch:
    """Writes a small payload unless told to fail or to write nothing."""

    def __init__(self, payload: bytes = b"MZ-installer", error: Optional[Exception] = None, write: bool = True):
        self.payload = payload
        self.error = error
        self.write = write
        self.calls: List[tuple] = []

    def __call__(self, url, dest, *, timeout=None, dry_run=False):
        self.calls.append((url, dest))
        if self.error is not None:
            raise self.error
        if self.write and not dry_run:
            Path(dest).write_bytes(self.payload)
        return len(self.payload)


class ScriptedInput:
    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def make_operator(*answers, assume_yes: bool = False):
    scripted = ScriptedInput(answers)
    output: List[str] = []
    operator = Operator(input_fn=scripted, output_fn=output.append, assume_yes=assume_yes)
    return operator, scripted, output


def places_binary(binary_path: str) -> Callable[[List[str]], None]:
    """Side effect for a fake msiexec call: the installed binary appears."""

    def effect(argv):
        p = Path(binary_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"binary")

    return effect


def leftover_files(directory: Path) -> List[Path]:
    return sorted(p for p in directory.iterdir() if p.is_file())

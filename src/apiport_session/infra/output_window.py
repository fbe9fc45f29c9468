from __future__ import annotations

import typer


class ConsoleOutputWindow:
    """Output surface that prints to the terminal.

    The pane header is printed the first time the window is shown.
    """

    def __init__(self, *, title: str = "Portability Analysis", err: bool = False) -> None:
        self._title = title
        self._err = err
        self._shown = False

    @property
    def shown(self) -> bool:
        return self._shown

    async def show(self) -> None:
        if self._shown:
            return
        self._shown = True
        typer.echo("=" * 80, err=self._err)
        typer.echo(self._title, err=self._err)
        typer.echo("=" * 80, err=self._err)

    def write_line(self, text: str) -> None:
        typer.echo(text, err=self._err)

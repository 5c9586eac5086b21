"""
Command-Line Interface for the matrix workspace.

Interactive command loop over a MatrixWorkspace: each input line is one
command with whitespace-separated arguments.

Usage:
    matcalc [OPTIONS]

Options:
    --load FILE         Load a workspace file before starting
    --storage-dir PATH  Directory for save/load files (default: workspaces)
    --log-level LEVEL   Logging level (default: WARNING)
"""

import argparse
import logging
import math
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, TextIO

from matcalc.workspace import MatrixWorkspace, WorkspaceConfig, WorkspaceOpResult

WORKSPACE_FILE_SUFFIXES = (".txt", ".json")


@dataclass(frozen=True)
class CommandSpec:
    """Описание команды: обработчик, описание и формат вызова."""

    handler: Callable[[List[str]], bool]
    description: str
    usage: str


class UsageError(ValueError):
    """Неверные аргументы команды."""
    pass


def _parse_int(token: str, name: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise UsageError(f"{name} must be an integer, got {token!r}")


def _parse_float(token: str, name: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise UsageError(f"{name} must be a number, got {token!r}")
    if not math.isfinite(value):
        raise UsageError(f"{name} must be a finite number, got {token!r}")
    return value


def _workspace_filename(filename: str) -> str:
    if filename.lower().endswith(WORKSPACE_FILE_SUFFIXES):
        return filename
    return filename + ".txt"


class MatrixShell:
    """Интерактивная оболочка над рабочим пространством матриц."""

    PROMPT = "> "

    def __init__(
        self,
        workspace: MatrixWorkspace,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.workspace = workspace
        self._lines: Iterator[str] = iter(stdin if stdin is not None else sys.stdin)
        self._out = stdout if stdout is not None else sys.stdout
        self.running = False

        self.commands: Dict[str, CommandSpec] = {
            "create": CommandSpec(self._create, "Create a new matrix with optional initial value.",
                                  "create <matName> <rows> <cols> [initValue]"),
            "delete": CommandSpec(self._single(self.workspace.delete),
                                  "Delete a matrix from the workspace.", "delete <matName>"),
            "assign": CommandSpec(self._assign, "Assign values to a matrix interactively.",
                                  "assign <matName>"),
            "list": CommandSpec(self._list, "List all matrices in the workspace.", "list"),
            "show": CommandSpec(self._single(self.workspace.show),
                                "Display the contents of a matrix.", "show <matName>"),
            "add": CommandSpec(self._binary(self.workspace.add),
                               "Add two matrices and store the result.",
                               "add <resultName> <mat1Name> <mat2Name>"),
            "subtract": CommandSpec(self._binary(self.workspace.subtract),
                                    "Subtract one matrix from another and store the result.",
                                    "subtract <resultName> <mat1Name> <mat2Name>"),
            "multiply": CommandSpec(self._binary(self.workspace.multiply),
                                    "Multiply two matrices and store the result.",
                                    "multiply <resultName> <mat1Name> <mat2Name>"),
            "scalar_multiply": CommandSpec(self._scalar_multiply,
                                           "Multiply a matrix by a scalar and store the result.",
                                           "scalar_multiply <resultName> <matName> <scalar>"),
            "transpose": CommandSpec(self._single(self.workspace.transpose),
                                     "Transpose a matrix.", "transpose <matName>"),
            "rank": CommandSpec(self._single(self.workspace.rank),
                                "Get the rank of a matrix.", "rank <matName>"),
            "det": CommandSpec(self._single(self.workspace.determinant),
                               "Get the determinant of a matrix.", "det <matName>"),
            "inverse": CommandSpec(self._inverse, "Get the inverse of a matrix and store it.",
                                   "inverse <resultName> <matName>"),
            "solve": CommandSpec(self._binary(self.workspace.solve),
                                 "Solve the linear system Ax=b and store the result.",
                                 "solve <resultName> <matrixA> <columnB>"),
            "rotate": CommandSpec(self._rotate,
                                  "Rotate a 3x1 vector around the X, Y and Z axes (degrees).",
                                  "rotate <vecName> <degX> <degY> <degZ>"),
            "save": CommandSpec(self._file_op(self.workspace.save),
                                "Save the current workspace to a file (.txt or .json).",
                                "save <filename>"),
            "load": CommandSpec(self._file_op(self.workspace.load),
                                "Load a workspace from a file (.txt or .json).",
                                "load <filename>"),
            "help": CommandSpec(self._help, "Display this help message.", "help [command]"),
            "exit": CommandSpec(self._exit, "Exit the CLI.", "exit"),
        }

    # =========================================================================
    # LOOP
    # =========================================================================

    def write(self, text: str) -> None:
        print(text, file=self._out)

    def read_line(self, prompt: str = PROMPT) -> Optional[str]:
        """Следующая строка ввода без перевода строки или None при EOF."""
        self._out.write(prompt)
        self._out.flush()
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        return line.rstrip("\r\n")

    def available_commands(self) -> List[str]:
        """Команды, доступные при текущем количестве матриц."""
        count = self.workspace.count
        if count == 0:
            return ["create", "load", "help", "exit"]

        available = ["create", "delete", "assign", "scalar_multiply", "transpose", "rank",
                     "det", "inverse", "rotate"]
        if count >= 2:
            available += ["add", "subtract", "multiply", "solve"]
        return available + ["list", "show", "save", "load", "help", "exit"]

    def execute(self, line: str) -> bool:
        """Выполнение одной команды. Возвращает True при успехе."""
        tokens = line.split()
        if not tokens:
            return True

        name, args = tokens[0], tokens[1:]
        if name not in self.available_commands():
            self.write(f"Unknown command: {name}")
            return False

        spec = self.commands[name]
        try:
            return spec.handler(args)
        except UsageError as e:
            self.write(f"Invalid arguments for {name} command: {e}")
            self.write(f"Usage: {spec.usage}")
            return False

    def run(self) -> int:
        self.running = True
        self.write("Algebraic Matrix CLI")
        self.write("Available commands: " + ", ".join(self.available_commands()))

        while self.running:
            line = self.read_line()
            if line is None:
                break
            if not line.strip():
                continue
            if not self.execute(line):
                self.write("Command execution failed. Type 'help' for commands and formats.")

        return 0

    # =========================================================================
    # HANDLERS
    # =========================================================================

    def _report(self, result: WorkspaceOpResult) -> bool:
        self.write(result.message)
        return result.success

    @staticmethod
    def _expect(args: List[str], count: int) -> None:
        if len(args) != count:
            raise UsageError(f"expected {count} argument(s), got {len(args)}")

    def _single(self, op: Callable[[str], WorkspaceOpResult]) -> Callable[[List[str]], bool]:
        def handler(args: List[str]) -> bool:
            self._expect(args, 1)
            return self._report(op(args[0]))
        return handler

    def _binary(
        self, op: Callable[[str, str, str], WorkspaceOpResult]
    ) -> Callable[[List[str]], bool]:
        def handler(args: List[str]) -> bool:
            self._expect(args, 3)
            return self._report(op(args[0], args[1], args[2]))
        return handler

    def _file_op(self, op: Callable[[str], WorkspaceOpResult]) -> Callable[[List[str]], bool]:
        def handler(args: List[str]) -> bool:
            self._expect(args, 1)
            return self._report(op(_workspace_filename(args[0])))
        return handler

    def _create(self, args: List[str]) -> bool:
        if len(args) not in (3, 4):
            raise UsageError(f"expected 3 or 4 arguments, got {len(args)}")
        rows = _parse_int(args[1], "rows")
        cols = _parse_int(args[2], "cols")
        init_value = _parse_float(args[3], "initValue") if len(args) == 4 else 0.0
        return self._report(self.workspace.create(args[0], rows, cols, init_value))

    def _assign(self, args: List[str]) -> bool:
        self._expect(args, 1)
        name = args[0]
        matrix = self.workspace.get(name)
        if matrix is None:
            self.write(f"Matrix '{name}' not found in workspace.")
            return False

        values: List[List[float]] = []
        for i in range(matrix.rows):
            row: List[float] = []
            while len(row) < matrix.cols:
                self.write(f"Assign value for element in ({i}, {len(row)})")
                line = self.read_line()
                if line is None:
                    self.write("Input ended before all values were assigned.")
                    return False
                try:
                    row.append(_parse_float(line.strip(), "value"))
                except UsageError:
                    # Повтор того же элемента
                    self.write("Invalid value assignment")
            values.append(row)

        return self._report(self.workspace.assign(name, values))

    def _list(self, args: List[str]) -> bool:
        self._expect(args, 0)
        return self._report(self.workspace.list_all())

    def _scalar_multiply(self, args: List[str]) -> bool:
        self._expect(args, 3)
        scalar = _parse_float(args[2], "scalar")
        return self._report(self.workspace.scalar_multiply(args[0], args[1], scalar))

    def _inverse(self, args: List[str]) -> bool:
        self._expect(args, 2)
        return self._report(self.workspace.inverse(args[0], args[1]))

    def _rotate(self, args: List[str]) -> bool:
        self._expect(args, 4)
        deg_x = _parse_float(args[1], "degX")
        deg_y = _parse_float(args[2], "degY")
        deg_z = _parse_float(args[3], "degZ")
        return self._report(self.workspace.rotate(args[0], deg_x, deg_y, deg_z))

    def _help(self, args: List[str]) -> bool:
        if len(args) > 1:
            raise UsageError(f"expected at most 1 argument, got {len(args)}")

        if args:
            spec = self.commands.get(args[0])
            if spec is None:
                self.write(f"Unknown command: {args[0]}")
                return False
            self.write(f"  - {args[0]} : {spec.usage}\n      {spec.description}")
            return True

        self.write("Available commands:")
        for name in sorted(self.commands):
            spec = self.commands[name]
            self.write(f"  - {name} : {spec.usage}\n      {spec.description}\n")
        return True

    def _exit(self, args: List[str]) -> bool:
        self._expect(args, 0)
        self.write("Exiting CLI.")
        self.running = False
        return True


# =============================================================================
# ENTRY POINT
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matcalc",
        description="Interactive dense-matrix calculator",
    )
    parser.add_argument("--load", metavar="FILE", help="Load a workspace file before starting")
    parser.add_argument(
        "--storage-dir",
        default="workspaces",
        help="Directory for save/load files (default: workspaces)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    workspace = MatrixWorkspace(WorkspaceConfig(storage_dir=args.storage_dir))
    shell = MatrixShell(workspace)

    if args.load:
        result = workspace.load(_workspace_filename(args.load))
        shell.write(result.message)
        if not result.success:
            return 1

    return shell.run()


if __name__ == "__main__":
    sys.exit(main())

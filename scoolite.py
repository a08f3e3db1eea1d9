# https://cstack.github.io/db_tutorial/
import re
import sys
import logging
from collections import namedtuple
from enum import Enum, auto

# --- Constants & Configuration ---
COLUMN_USERNAME_SIZE = 32
COLUMN_EMAIL_SIZE = 255

ID_PATTERN = re.compile(r"[0-9]+")

PROMPT = "db > "

META_COMMAND_SIGIL = "."
EXIT_COMMAND = ".exit"
INSERT_KEYWORD = "insert"
SELECT_KEYWORD = "select"

EXECUTED_SUFFIX = "Executed.\n"

logger = logging.getLogger(__name__)

# --- Errors ---

class DbError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __eq__(self, other):
        return type(self) is type(other) and self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))

    def __str__(self):
        return self.message

class UnrecognizedStatement(DbError):
    def __init__(self, text):
        super().__init__(f"Unrecognized keyword at start of '{text}'")

class InvalidSyntax(DbError):
    def __init__(self, field):
        super().__init__(f"Syntax error. Failed to parse '{field}' of input")
        self.field = field

# --- Enums ---

class MetaCommand(Enum):
    EXIT = auto()

class StatementType(Enum):
    INSERT = auto()
    SELECT = auto()

class Action(Enum):
    CONTINUE = auto()
    EXIT = auto()

# --- Data Objects ---

class Row(namedtuple("Row", ["id", "username", "email"])):
    __slots__ = ()

    def __str__(self):
        return format_row(self)

# args is only used by insert, parsed into a Row on execute.
Statement = namedtuple("Statement", ["type", "args"], defaults=[""])

# What the REPL gets back: text to print, and whether to keep going.
Result = namedtuple("Result", ["output", "action"])

class Table:
    """Append-only, in-memory rows kept in insertion order."""

    def __init__(self):
        self._rows = []

    @property
    def num_rows(self):
        return len(self._rows)

    def add_row(self, row):
        self._rows.append(row)

    def list_rows(self):
        # A snapshot, so callers can iterate it as many times as they like.
        return tuple(self._rows)

    def __len__(self):
        return len(self._rows)

    def __iter__(self):
        return iter(self.list_rows())

# --- Row Parsing ---

def parse_row(text):
    """Builds a Row from '<id> <username> <email>'.

    Fields are checked in order and the first bad one is named in the
    InvalidSyntax error. No Row is returned unless all three are valid.
    """
    parts = text.split()

    # Plain ASCII digits only: no sign, no '_' separators, no other scripts.
    if not parts or not ID_PATTERN.fullmatch(parts[0]):
        raise InvalidSyntax("id")
    id_val = int(parts[0])

    if len(parts) < 2 or len(parts[1]) > COLUMN_USERNAME_SIZE:
        raise InvalidSyntax("username")

    if len(parts) != 3 or len(parts[2]) > COLUMN_EMAIL_SIZE:
        raise InvalidSyntax("email")

    return Row(id_val, parts[1], parts[2])

def format_row(row):
    return f"({row.id}, {row.username}, {row.email})"

# --- Command Parsing ---

def parse_meta_command(user_input):
    if user_input == EXIT_COMMAND:
        return MetaCommand.EXIT
    raise UnrecognizedStatement(user_input)

def prepare_statement(user_input):
    if user_input.startswith(INSERT_KEYWORD):
        return Statement(StatementType.INSERT, user_input[len(INSERT_KEYWORD):])
    if user_input.startswith(SELECT_KEYWORD):
        # Anything after the keyword is ignored.
        return Statement(StatementType.SELECT)
    raise UnrecognizedStatement(user_input)

def build_command(user_input):
    """Classifies input by its first character: '.' means meta command."""
    user_input = user_input.strip()
    if user_input.startswith(META_COMMAND_SIGIL):
        return parse_meta_command(user_input)
    return prepare_statement(user_input)

# --- Execution Logic ---

def execute_insert(statement, table):
    row = parse_row(statement.args)
    table.add_row(row)
    logger.debug("Inserted %r, table has %d rows", row, table.num_rows)
    return ""

def execute_select(statement, table):
    return "".join(f"{format_row(row)}\n" for row in table.list_rows())

def execute_statement(statement, table):
    if statement.type == StatementType.INSERT:
        output = execute_insert(statement, table)
    elif statement.type == StatementType.SELECT:
        output = execute_select(statement, table)
    else:
        raise ValueError(f"Unknown statement type {statement.type!r}")
    return Result(output + EXECUTED_SUFFIX, Action.CONTINUE)

def execute_meta_command(command, table):
    if command == MetaCommand.EXIT:
        return Result("", Action.EXIT)
    raise ValueError(f"Unknown meta command {command!r}")

def execute_command(command, table):
    if isinstance(command, MetaCommand):
        return execute_meta_command(command, table)
    return execute_statement(command, table)

def run(table, user_input):
    """Parses and executes one line of input against table.

    Returns a Result; raises a DbError subclass if the line is rejected.
    """
    try:
        command = build_command(user_input)
    except DbError as e:
        logger.debug("Rejected %r: %s", user_input, e)
        raise
    logger.debug("Running %r", command)
    return execute_command(command, table)

# --- CLI ---

def main():
    table = Table()

    while True:
        try:
            user_input = input(PROMPT)
        except EOFError:
            # Handles Ctrl+D (End of File)
            sys.exit(0)

        if not user_input.strip():
            continue

        try:
            result = run(table, user_input)
        except DbError as e:
            print(e)
            continue

        if result.action == Action.EXIT:
            sys.exit(0)
        print(result.output, end="")

if __name__ == "__main__":
    main()

"""
Command Line Interface Module - SQL*Plus style terminal for the simulator
"""

import cmd
import os
import zlib

from .catalog.catalog import Catalog
from .query.engine import QueryEngine
from .query.planner import ExecutionPlan
from .query.result import QueryResult
from .session.session_manager import SessionManager, is_session_command
from .logging_utils import configure_logging
from .constants import (STATEMENT_TERMINATORS, ORA_INTERNAL_ERROR, ERROR_MESSAGES,
                        DEFAULT_LOG_LEVEL)
from .types.value import format_number


MIN_COLUMN_WIDTH = 10

HELP_TEXT = """
Oracle Database Simulator - Available Commands:

SQL Commands:
  CREATE TABLE table_name (column_name datatype, ...)
  INSERT INTO table_name [(columns)] VALUES (value1, value2, ...)
  SELECT * FROM table_name [WHERE condition]
  UPDATE table_name SET column=value [WHERE condition]
  DELETE FROM table_name [WHERE condition]
  DROP TABLE table_name
  CREATE [UNIQUE] INDEX index_name ON table_name (column)
  DESC[RIBE] table_name
  SELECT expression FROM DUAL

Session Commands:
  COMMIT - Commit current transaction
  ROLLBACK - Rollback current transaction
  SAVEPOINT name - Create savepoint
  SET AUTOCOMMIT {ON|OFF}
  SET PAGESIZE number
  SHOW USER
  SHOW AUTOCOMMIT

Utility Commands:
  TABLES - List tables
  RESET - Drop every table
  CLEAR/CLS - Clear screen
  HELP - Show this help
  EXIT/QUIT - Exit simulator

Oracle Data Types Supported:
  VARCHAR2(size), NUMBER(p,s), DATE, TIMESTAMP

End SQL statements with ';' or '/'.
"""


def format_cell(value) -> str:
    """Display text for a row value; absent values render empty"""
    if value is None:
        return ''
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return str(value)


def format_table_result(result: QueryResult) -> str:
    """Render rows as a padded text table followed by the row count"""
    columns = result.columns
    data = result.data

    widths = []
    for col in columns:
        max_len = max([len(format_cell(row.get(col))) for row in data] + [len(col), MIN_COLUMN_WIDTH])
        widths.append(max_len)

    lines = ['']
    lines.append(' '.join(col.ljust(width) for col, width in zip(columns, widths)).rstrip())
    lines.append(' '.join('-' * width for width in widths))
    for row in data:
        lines.append(' '.join(format_cell(row.get(col)).ljust(width)
                              for col, width in zip(columns, widths)).rstrip())

    count = len(data)
    lines.append('')
    lines.append(f"{count} row{'' if count == 1 else 's'} selected.")
    return '\n'.join(lines)


def format_execution_plan(plan: ExecutionPlan) -> str:
    """Render the plan the way SQL*Plus AUTOTRACE prints it"""
    plan_hash = zlib.crc32(f"{plan.operation}:{plan.object_name}".encode('utf-8'))
    return '\n'.join([
        '',
        'Execution Plan:',
        '-' * 58,
        f"Plan hash value: {plan_hash}",
        '',
        '| Operation         | Name     | Rows  | Bytes | Cost  | Time     |',
        '|-------------------|----------|-------|-------|-------|----------|',
        f"| {plan.operation:<17} | {plan.object_name:<8} | {plan.cardinality:<5} "
        f"| {plan.bytes:<5} | {plan.cost:<5} | {plan.time:<8} |",
        '',
    ])


class OraSimREPL(cmd.Cmd):
    """Interactive SQL*Plus style REPL"""

    intro = """
    ╔══════════════════════════════════════╗
    ║      Oracle Database Simulator       ║
    ║      In-memory SQL*Plus terminal     ║
    ║      Type 'help' for commands        ║
    ╚══════════════════════════════════════╝
    """
    prompt = "SQL> "

    def __init__(self, engine: QueryEngine = None, session: SessionManager = None, **kwargs):
        super().__init__(**kwargs)
        self.engine = engine if engine is not None else QueryEngine(Catalog())
        self.session = session if session is not None else SessionManager()
        self.buffer = []

    def emptyline(self):
        """Blank lines do not repeat the previous command"""
        return False

    def onecmd(self, line):
        if line == 'EOF':
            return self.do_EOF(line)
        # Continuation lines of a buffered statement are never utility commands
        if self.buffer:
            return self.default(line)
        word = line.strip().rstrip(';').strip()
        if word.upper() in ('EXIT', 'QUIT', 'HELP', 'CLEAR', 'CLS', 'TABLES', 'RESET'):
            line = word.lower()
        return super().onecmd(line)

    def do_quit(self, arg):
        """Exit the REPL"""
        print("Disconnected from Oracle Database Simulator")
        return True

    def do_exit(self, arg):
        """Exit the REPL"""
        return self.do_quit(arg)

    def do_EOF(self, arg):
        """Exit on Ctrl-D"""
        print()
        return self.do_quit(arg)

    def do_help(self, arg):
        """Show available commands"""
        print(HELP_TEXT)

    def do_clear(self, arg):
        """Clear the screen"""
        print("\033[H\033[2J", end='')

    def do_cls(self, arg):
        """Clear the screen"""
        self.do_clear(arg)

    def do_tables(self, arg):
        """List tables with their column and row counts"""
        tables = self.engine.catalog.list_tables()
        if not tables:
            print("no rows selected")
            return

        print(f"\n{'TABLE_NAME':<30} {'COLUMNS':>7} {'ROWS':>7} {'INDEXES':>7}")
        print(f"{'-' * 30} {'-' * 7} {'-' * 7} {'-' * 7}")
        for table in tables:
            print(f"{table.name:<30} {len(table.columns):>7} {len(table.rows):>7} {len(table.indexes):>7}")
        print()

    def do_reset(self, arg):
        """Drop every table"""
        self.engine.catalog.clear()
        print("Database cleared.")

    def default(self, line: str) -> None:
        """Handle session commands and (possibly multi-line) SQL statements"""
        # A blank line ends buffering and discards the unfinished statement
        if self.buffer and not line.strip():
            self.buffer = []
            self.prompt = OraSimREPL.prompt
            return

        if not self.buffer and is_session_command(line):
            print(self.session.execute(line))
            return

        self.buffer.append(line)
        statement = '\n'.join(self.buffer).strip()
        if not statement:
            self.buffer = []
            return

        if not statement.endswith(STATEMENT_TERMINATORS):
            self.prompt = f"{len(self.buffer) + 1:>3}  "
            return

        self.buffer = []
        self.prompt = OraSimREPL.prompt
        self.run_statement(statement)

    def run_statement(self, statement: str) -> None:
        """Execute one complete statement and print its result"""
        try:
            result = self.engine.execute_sql(statement)
        except Exception as e:
            print(f"{ORA_INTERNAL_ERROR}: {ERROR_MESSAGES[ORA_INTERNAL_ERROR]}: {e}")
            return
        self._display_result(result)

    def _display_result(self, result: QueryResult) -> None:
        """Display a query result"""
        if not result.success:
            print(result.error or 'Unknown error occurred')
            return

        if result.data is not None and result.columns is not None:
            print(format_table_result(result))
            if result.execution_time is not None:
                print(f"\nElapsed: {result.execution_time} ms")
        else:
            print(result.message or 'Command completed successfully.')

        if result.execution_plan is not None:
            print(format_execution_plan(result.execution_plan))


def main():
    configure_logging(os.environ.get('ORASIM_LOG_LEVEL', DEFAULT_LOG_LEVEL))
    repl = OraSimREPL(session=SessionManager(os.environ.get('ORASIM_SESSION_FILE')))
    try:
        repl.cmdloop()
    except KeyboardInterrupt:
        print("\nExiting...")


if __name__ == "__main__":
    main()


import re
from datetime import datetime, timezone
import pytest
from orasim.catalog.catalog import Catalog
from orasim.query.engine import QueryEngine


@pytest.fixture
def engine():
    return QueryEngine(Catalog())


@pytest.fixture
def emp(engine):
    engine.execute_sql("CREATE TABLE emp (id NUMBER(5), name VARCHAR2(50) NOT NULL, salary NUMBER(10,2))")
    engine.execute_sql("INSERT INTO emp VALUES (1, 'Alice', 5000)")
    engine.execute_sql("INSERT INTO emp VALUES (2, 'Bob', 2500)")
    engine.execute_sql("INSERT INTO emp (id, name) VALUES (3, 'Carol')")
    return engine


def test_end_to_end_scenario(engine):
    result = engine.execute_sql("CREATE TABLE emp (id NUMBER(5), name VARCHAR2(50) NOT NULL, salary NUMBER(10,2));")
    assert result.success
    assert result.message == "Table emp created."
    assert result.row_count == 0

    result = engine.execute_sql("INSERT INTO emp VALUES (1, 'Alice', 5000);")
    assert result.message == "1 row created."
    assert result.row_count == 1

    result = engine.execute_sql("SELECT name FROM emp WHERE salary > 3000")
    assert result.success
    assert result.columns == ["NAME"]
    assert result.data == [{"NAME": "Alice"}]
    assert result.row_count == 1

    result = engine.execute_sql("UPDATE emp SET salary = 6000 WHERE id = 1")
    assert result.message == "1 row updated."

    result = engine.execute_sql("DELETE FROM emp WHERE id = 2")
    assert result.message == "0 rows deleted."
    assert result.row_count == 0

    result = engine.execute_sql("DROP TABLE emp")
    assert result.message == "Table EMP dropped."
    assert engine.catalog.get_table("emp") is None


def test_scenario_select_star_then_drop(engine):
    assert engine.execute_sql("CREATE TABLE T (ID NUMBER, NAME VARCHAR2(50))").success
    assert engine.execute_sql("INSERT INTO T VALUES (1,'A')").message == "1 row created."

    result = engine.execute_sql("SELECT * FROM T")
    assert result.columns == ["ID", "NAME"]
    assert result.data == [{"ID": 1, "NAME": "A"}]

    assert engine.execute_sql("UPDATE T SET NAME='B' WHERE ID=1").message == "1 row updated."
    assert engine.execute_sql("DELETE FROM T WHERE ID=1").message == "1 row deleted."
    assert engine.execute_sql("DROP TABLE T").success

    result = engine.execute_sql("SELECT * FROM T")
    assert not result.success
    assert result.error == "ORA-00942: table or view does not exist: T"


def test_select_star_expands_declared_columns(emp):
    result = emp.execute_sql("SELECT * FROM emp WHERE id >= 2")
    assert result.columns == ["ID", "NAME", "SALARY"]
    assert result.data == [
        {"ID": 2, "NAME": "Bob", "SALARY": 2500},
        {"ID": 3, "NAME": "Carol", "SALARY": None},
    ]


def test_select_plan_sized_by_filtered_rows(emp):
    result = emp.execute_sql("SELECT id FROM emp WHERE id > 1")
    plan = result.execution_plan
    assert plan.operation == "SELECT STATEMENT"
    assert plan.object_name == "EMP"
    assert (plan.cardinality, plan.bytes, plan.cost) == (2, 200, 1)


def test_select_unknown_column_yields_absent_value(emp):
    result = emp.execute_sql("SELECT id, bonus FROM emp WHERE id = 1")
    assert result.data == [{"ID": 1, "BONUS": None}]


def test_or_conditions(emp):
    result = emp.execute_sql("SELECT id FROM emp WHERE id = 1 OR name = 'Carol'")
    assert [row["ID"] for row in result.data] == [1, 3]


def test_insert_typing_and_lax_counts(engine):
    engine.execute_sql("CREATE TABLE t (a VARCHAR2(10), b NUMBER, c VARCHAR2(10))")
    engine.execute_sql("INSERT INTO t VALUES ('x, y', 1.5)")
    engine.execute_sql("INSERT INTO t (a) VALUES ('007', 2, 3)")
    engine.execute_sql("INSERT INTO t VALUES (raw_text, -4, '')")

    rows = engine.catalog.get_table("t").rows
    assert rows[0] == {"A": "x, y", "B": 1.5}
    assert rows[1] == {"A": "007"}
    assert rows[2] == {"A": "raw_text", "B": -4, "C": ""}


def test_insert_applies_declared_defaults(engine):
    engine.execute_sql("CREATE TABLE orders (id NUMBER, status VARCHAR2(10) DEFAULT 'NEW', qty NUMBER DEFAULT 1)")
    engine.execute_sql("INSERT INTO orders (id) VALUES (7)")
    engine.execute_sql("INSERT INTO orders VALUES (8, 'SHIPPED', 5)")

    rows = engine.catalog.get_table("ORDERS").rows
    assert rows == [
        {"ID": 7, "STATUS": "NEW", "QTY": 1},
        {"ID": 8, "STATUS": "SHIPPED", "QTY": 5},
    ]


def test_insert_evaluates_default_expressions(engine):
    engine.execute_sql("CREATE TABLE audit (id NUMBER, created DATE DEFAULT SYSDATE, "
                       "stamp TIMESTAMP DEFAULT SYSTIMESTAMP, who VARCHAR2(30) DEFAULT USER)")
    before = datetime.now(timezone.utc).date().isoformat()
    engine.execute_sql("INSERT INTO audit (id) VALUES (1)")
    after = datetime.now(timezone.utc).date().isoformat()

    row = engine.catalog.get_table("AUDIT").rows[0]
    assert row["CREATED"] != "CURRENT_TIMESTAMP"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", row["CREATED"])
    assert row["CREATED"][:10] in (before, after)
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", row["STAMP"])
    assert row["WHO"] == "ORACLE_SIM"


def test_unsupported_default_expression_rejected(engine):
    result = engine.execute_sql("CREATE TABLE t (id NUMBER, code VARCHAR2(5) DEFAULT somefunc)")
    assert not result.success
    assert result.error.startswith("ORA-00907")
    assert engine.catalog.get_table("t") is None


def test_update_uses_insert_typing(emp):
    result = emp.execute_sql("UPDATE emp SET salary = 100, name = 'Zed'")
    assert result.message == "3 rows updated."
    assert result.row_count == 3

    result = emp.execute_sql("SELECT id FROM emp WHERE salary < 200")
    assert result.row_count == 3
    assert emp.catalog.get_table("emp").rows[0]["SALARY"] == 100


def test_delete_messages(emp):
    assert emp.execute_sql("DELETE FROM emp WHERE id = 1").message == "1 row deleted."
    assert emp.execute_sql("DELETE FROM emp").message == "2 rows deleted."
    assert emp.catalog.get_table("emp").rows == []


def test_delete_matching_nothing_keeps_rows(emp):
    table = emp.catalog.get_table("emp")
    before = len(table.rows)
    assert before == 3

    result = emp.execute_sql("DELETE FROM emp WHERE id = 99")
    assert result.message == "0 rows deleted."
    assert result.row_count == 0
    assert len(table.rows) == before


def test_create_index(emp):
    result = emp.execute_sql("CREATE UNIQUE INDEX emp_name_idx ON emp (name)")
    assert result.message == "Index emp_name_idx created."

    emp.execute_sql("create index emp_sal_idx on emp (salary, bogus)")
    indexes = emp.catalog.get_table("emp").indexes
    assert [(i.name, i.columns, i.unique, i.index_type.value) for i in indexes] == [
        ("EMP_NAME_IDX", ["NAME"], True, "BTREE"),
        ("EMP_SAL_IDX", ["SALARY", "BOGUS"], False, "BTREE"),
    ]


def test_describe(emp):
    result = emp.execute_sql("DESC emp")
    assert result.columns == ["Name", "Null?", "Type"]
    assert result.data == [
        {"Name": "ID", "Null?": "", "Type": "INTEGER"},
        {"Name": "NAME", "Null?": "NOT NULL", "Type": "VARCHAR(50)"},
        {"Name": "SALARY", "Null?": "", "Type": "DECIMAL(10,2)"},
    ]
    assert result.row_count == 3


def test_create_table_default_column_type(engine):
    engine.execute_sql("CREATE TABLE notes (body, created DATE)")
    result = engine.execute_sql("DESCRIBE notes")
    assert [row["Type"] for row in result.data] == ["VARCHAR2(255)", "TIMESTAMP"]


@pytest.mark.parametrize("expression, expected", [
    ("1+1", 2),
    ("6 * 7", 42),
    ("10 - 15", -5),
    ("10/2", 5),
    ("7 / 2", 3.5),
    ("USER", "ORACLE_SIM"),
    ("'Hello'", "Hello"),
])
def test_dual(engine, expression, expected):
    result = engine.execute_sql(f"SELECT {expression} FROM DUAL")
    assert result.success
    assert result.columns == [expression]
    assert result.data == [{expression: expected}]
    assert result.row_count == 1


def test_dual_dates(engine):
    before = datetime.now(timezone.utc).date().isoformat()
    date = engine.execute_sql("SELECT SYSDATE FROM DUAL").data[0]["SYSDATE"]
    after = datetime.now(timezone.utc).date().isoformat()
    assert date in (before, after)

    stamp = engine.execute_sql("SELECT systimestamp FROM dual").data[0]["systimestamp"]
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", stamp)
    assert stamp[:10] >= date


@pytest.mark.parametrize("sql, error", [
    ("SELECT * FROM nope", "ORA-00942: table or view does not exist: nope"),
    ("INSERT INTO nope VALUES (1)", "ORA-00942: table or view does not exist: nope"),
    ("UPDATE nope SET a = 1", "ORA-00942: table or view does not exist: nope"),
    ("DELETE FROM nope", "ORA-00942: table or view does not exist: nope"),
    ("DROP TABLE nope", "ORA-00942: table or view does not exist: NOPE"),
    ("DESC nope", "ORA-00942: table or view does not exist: NOPE"),
    ("CREATE INDEX i ON nope (a)", "ORA-00942: table or view does not exist: nope"),
    ("DROP TABLE", "ORA-00942: table or view does not exist"),
    ("CREATE TABLE Emp (id NUMBER)", "ORA-00955: name is already used by an existing object: Emp"),
    ("CREATE TABLE t", "ORA-00907: missing right parenthesis"),
    ("SELECT FROM emp", "ORA-00936: missing expression"),
    ("SELECT 10/0 FROM DUAL", "ORA-01476: divisor is equal to zero"),
    ("MERGE INTO emp", "ORA-00900: invalid SQL statement"),
])
def test_errors(emp, sql, error):
    result = emp.execute_sql(sql)
    assert result.success is False
    assert result.error == error
    assert result.message is None


def test_failed_statement_has_no_effect(emp):
    emp.execute_sql("CREATE TABLE emp (x NUMBER)")
    assert [c.name for c in emp.catalog.get_table("emp").columns] == ["ID", "NAME", "SALARY"]


def test_execution_time_recorded(emp):
    result = emp.execute_sql("SELECT * FROM emp")
    assert result.execution_time >= 0
    assert round(result.execution_time, 3) == result.execution_time


def test_internal_fault_becomes_ora_00907(emp, monkeypatch):
    def explode(stmt):
        raise RuntimeError("boom")

    monkeypatch.setattr(emp.executor, "execute", explode)
    result = emp.execute_sql("SELECT * FROM emp")
    assert result.success is False
    assert result.error == "ORA-00907: boom"
    assert result.execution_time == 0


def test_result_to_dict(emp):
    result = emp.execute_sql("INSERT INTO emp VALUES (4, 'Dan', 1)").to_dict()
    assert result["success"] is True
    assert result["message"] == "1 row created."
    assert result["rowCount"] == 1
    assert "error" not in result
    assert "data" not in result

    result = emp.execute_sql("SELECT * FROM emp WHERE id = 4").to_dict()
    assert result["executionPlan"]["object"] == "EMP"
    assert result["data"] == [{"ID": 4, "NAME": "Dan", "SALARY": 1}]

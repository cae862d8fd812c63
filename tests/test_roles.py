from promptsql.core.engine.roles import infer_roles
from promptsql.core.models import TableDescriptor


def test_identifier_is_first_auto_default_column(make_table, make_column):
    """Later sequence-backed columns are ignored"""
    table = make_table(
        "orders",
        make_column("code", "text"),
        make_column("order_id", "bigint", auto=True),
        make_column("legacy_id", "integer", auto=True),
    )
    assert table.identifier_column == "order_id"


def test_display_needs_name_and_text_type(make_table, make_column):
    """A numeric *_name column does not qualify, the next text one does"""
    table = make_table(
        "people",
        make_column("id", "integer", auto=True),
        make_column("name_hash", "integer"),
        make_column("Display_Name", "character varying"),
        make_column("nickname", "text"),
    )
    assert table.display_column == "Display_Name"


def test_no_roles_found(readings_table):
    """Roles stay unset and name search falls back to the literal name column"""
    assert readings_table.identifier_column is None
    assert readings_table.display_column is None
    assert readings_table.resolved_display == "name"


def test_infer_roles_returns_new_descriptor(make_column):
    original = TableDescriptor(
        name="brands",
        schema_name="public",
        columns=(
            make_column("id", "integer", auto=True),
            make_column("brand_name", "character varying"),
        ),
    )
    inferred = infer_roles(original)

    assert inferred is not original
    assert original.identifier_column is None
    assert inferred.identifier_column == "id"
    assert inferred.display_column == "brand_name"
    assert inferred.schema_name == "public"
    assert inferred.columns == original.columns


def test_empty_table_has_no_roles(make_table):
    table = make_table("empty")
    assert table.columns == ()
    assert table.identifier_column is None
    assert table.display_column is None

import pytest

from sqlcraft.dialects import (
    GENERIC_DIALECT,
    Dialect,
    EnumSyntax,
    TriggerCreateFeature,
    UnionFeature,
    UpsertSyntax,
)
from sqlcraft.expressions import DataType, Identifier


def test_generic_dialect_defaults():
    dialect = Dialect()
    assert dialect.name == "generic"
    assert dialect.bind_placeholder(3) == "?"
    assert dialect.literal_boolean(True) == "true"
    assert dialect.literal_default == "DEFAULT"
    assert dialect.supports_if_exists is True
    assert dialect.supports_returning is False
    assert dialect.enum_syntax is EnumSyntax.UNSUPPORTED
    assert dialect.upsert_syntax is UpsertSyntax.UNSUPPORTED
    assert dialect.union_features == UnionFeature.UNION | UnionFeature.UNION_ALL
    assert dialect.shared_select_lock is None
    assert dialect.trigger_syntax.create == TriggerCreateFeature.NONE
    assert dialect.alter_table_syntax.alter_column_definition_clause is None
    assert dialect.alter_table_syntax.allows_batch is True


def test_default_hooks_are_inert():
    identifier = Identifier("pk_users")
    assert GENERIC_DIALECT.custom_data_type(DataType.TEXT) is None
    assert GENERIC_DIALECT.normalize_constraint(identifier) is identifier
    assert GENERIC_DIALECT.nested_subpath_expression(identifier, ["a"]) is None


def test_quoting_doubles_embedded_quotes():
    assert GENERIC_DIALECT.quote_identifier('a"b') == '"a""b"'
    assert GENERIC_DIALECT.quote_string("it's") == "'it''s'"


def test_replace_builds_variants_without_touching_original():
    variant = GENERIC_DIALECT.replace(name="variant", supports_returning=True)
    assert variant.supports_returning is True
    assert GENERIC_DIALECT.supports_returning is False


def test_with_param_style():
    dollar = GENERIC_DIALECT.with_param_style("dollar")
    assert dollar.param_style == "dollar"
    assert dollar.bind_placeholder(4) == "$4"
    assert GENERIC_DIALECT.with_param_style("numeric").bind_placeholder(4) == ":4"
    assert GENERIC_DIALECT.with_param_style("pyformat").bind_placeholder(1) == "%s"
    assert GENERIC_DIALECT.with_param_style("format").bind_placeholder(1) == "%s"
    with pytest.raises(ValueError):
        GENERIC_DIALECT.with_param_style("named")


def test_feature_sets_support_superset_queries():
    features = UnionFeature.UNION | UnionFeature.INTERSECT | UnionFeature.EXPLICIT_DISTINCT
    assert UnionFeature.INTERSECT in features
    assert (UnionFeature.UNION | UnionFeature.INTERSECT) in features
    assert UnionFeature.EXCEPT not in features

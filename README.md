# arana

Sharding rules and shard routing for a database proxy. Given a condition on
the sharding columns of a logical table, the package works out which physical
databases and tables the condition can reach.

## Install

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

The package has no dependencies outside the standard library.

## Modules

- `arana.rule`: `Rule`, `VTable`, `ShardMetadata` and the `ShardComputer`
  protocol. A `Rule` maps logical table names to `VTable`s; a `VTable` maps
  each sharding column to a pair of database and table `ShardMetadata`
  (either may be `None`) and holds a `Topology`.
- `arana.topology`: `Topology` keeps the table indexes of each database index
  and renders indexes into database and table names with the functions given
  to `set_render`.
- `arana.shard`: the shard computers `ModShard`, `HashMd5Shard`,
  `HashCrc32Shard` and `HashBKDRShard`, the `ShardType` names and
  `shard_factory(shard_type, shard_num)`, which raises `ValueError` for a
  non-positive shard count or an unknown type.
- `arana.stepper`: `Stepper` and `StepUnit`. A stepper moves a value forward
  or backward (`after`, `before`) and iterates values (`ascend`, `descend`)
  for integers and for `datetime` values in hours, days or weeks.
- `arana.cmp`: `Comparative`, `Comparison`, `Kind`, `parse_comparison` and the
  constructors `new`, `new_int64`, `new_date`, `new_string`.
- `arana.logical`: boolean expressions over atoms (`new`, `and_`, `or_`,
  `not_`), simplified as they are built, and `eval_logical` / `eval_bool` to
  fold them over the atoms' values.
- `arana.evaluator`: `KeyedEvaluator`, `new_keyed`, `evaluate`,
  `ALWAYS_TRUE_LOGICAL`, `ALWAYS_FALSE_LOGICAL` and `NoRuleMetadataError`.
  `evaluate` folds a logical expression of keyed conditions into one
  `Evaluator`, whose `eval(table_name, rule)` returns the matched shards.
- `arana.route`: `route` builds a `Matcher` for a `Comparative`, and
  `match_tables` maps sharding values onto `{database: [tables]}`.
- `arana.ranges`: `multiple`, `single` and `filter_range` iterators.
- `arana.database_tables`: `union`, `intersection`, `is_full_scan`,
  `is_empty`, `is_confused`, `smallest` and `format_tables` for
  `{database: [tables]}` mappings, where `"*"` is a wildcard.
- `arana.escape`: `escape`, `unescape` and `EscapeFlag` for SQL literals.
- `arana.misc`: `compare`, `compute_unary`, `is_zero`, `is_float_equal`,
  `wrap`.
- `arana.textutil`: `pad_left`, `pad_right`, `is_blank` and the
  `first_non_empty_string` family.
- `arana.execute_mode`: `ExecuteMode` and `parse_execute_mode`.

## Example

```python
from arana.cmp import Comparison
from arana.evaluator import evaluate, new_keyed
from arana.rule import Rule, ShardMetadata, VTable
from arana.shard import ModShard
from arana.stepper import Stepper, StepUnit
from arana.topology import Topology

topology = Topology()
topology.set_topology(0, *range(8))
topology.set_render(lambda _: "school", lambda i: f"student_{i:04d}")

vtable = VTable()
vtable.set_topology(topology)
vtable.set_shard_metadata(
    "uid", None, ShardMetadata(stepper=Stepper(1, StepUnit.NUM), computer=ModShard(8))
)

rule = Rule()
rule.set_vtable("student", vtable)

condition = new_keyed("uid", Comparison.EQ, 7).to_logical().or_(
    new_keyed("uid", Comparison.EQ, 12).to_logical()
)
shards = evaluate(condition, "student", rule).eval("student", rule)
print(shards)  # {'school': ['student_0004', 'student_0007']}
```

A result of `None` means every shard has to be scanned; an empty mapping means
no shard can match.

## What it does not do

The package is the shard-computation core only. It does not parse SQL: the
conditions are built by hand with `new_keyed` and the `arana.logical`
operators. It has no proxy server, no connections or connection pools, no
configuration loading and no query plans or execution, and it provides no
command to run.
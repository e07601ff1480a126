"""
Core package for tagstream contracts (event record, table descriptor, constants, versioning).

## Contracts (single source of truth)
- Schema — the TimeTag event record and pydantic write summaries.
- Tables — the time_tags descriptor that IO backends materialize into Arrow schemas.
- Constants — chunk/file row thresholds, compression codec, file naming format.
- Versioning — schema version metadata embedded in every Parquet file.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Column names are lower_snake; dtypes are the short unsigned codes "u16"/"u64".

## Downstream usage
- tagstream.io builds the Arrow schema from `tables`, sizes buffers and rotation from
  `constants`, and stamps `versioning.SCHEMA_V` into Parquet key-value metadata.
- tagstream.sim emits `schema.TimeTag` records.

## Examples
```python
from tagstream.core.schema import TimeTag
from tagstream.core.tables import TIME_TAGS_DESC

tag = TimeTag(channel_id=0, time_tag_ps=100)
list(TIME_TAGS_DESC.columns)  # ['channel', 'time_tag']
```
"""

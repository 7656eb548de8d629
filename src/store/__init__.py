from doccache.store.sources import ModelBacked, QuerySource, RawCollection, as_query_source

__all__ = ["ModelBacked", "QuerySource", "RawCollection", "as_query_source"]

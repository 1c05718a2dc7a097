from .set_assoc_cache import SetAssociativeCache

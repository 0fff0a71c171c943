from jobseeker.models.document import StoredDocument
from jobseeker.models.account import Account
from jobseeker.models.cache import CacheEntry

__all__ = ["StoredDocument", "Account", "CacheEntry"]

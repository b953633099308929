# src/libs/upload-common/upload_common/exceptions.py

class StoreUnavailableError(Exception):
    """
    Raised by an upload store when the underlying database cannot answer
    (connection refused, dropped connection, statement failure).

    Query services catch this and report it to their callers as a
    STORE_UNAVAILABLE failure. The caller decides whether to retry.
    """
    pass

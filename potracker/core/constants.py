"""Core constants: collection names and search rules shared across layers.

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written, so these names are the "schema".
"""

# Source collections (one per searchable entity type)
COLLECTION_PURCHASE_ORDERS = "purchaseOrders"
COLLECTION_VENDORS = "vendors"
COLLECTION_APPOINTMENTS = "appointments"
COLLECTION_SHIPMENTS = "shipments"
COLLECTION_TRANSPORTERS = "transporters"
COLLECTION_RETURN_ORDERS = "returnOrders"

# Derived search index (one entry per source document)
COLLECTION_SEARCH_INDEX = "searchIndex"

# Queries shorter than this (after trimming) are rejected, and tokens shorter
# than this are never indexed or used for matching.
MIN_QUERY_LENGTH = 2
MIN_TOKEN_LENGTH = 2

# Source document timestamp fields
FIELD_CREATED_AT = "createdAt"
FIELD_UPDATED_AT = "updatedAt"

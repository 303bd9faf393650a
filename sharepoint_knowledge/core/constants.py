"""
Well-known names and tuning values for the search topology and ingestion.

Contains index/profile/algorithm names, HNSW parameters, chunking limits,
blob container and content-type tables.
"""

from datetime import timedelta
from typing import Final

# Index names
PREVECTORIZED_INDEX: Final[str] = "sharepoint-foundry-vectorized"
PULL_PIPELINE_INDEX: Final[str] = "sharepoint-foundry"

# Vector dimensions of the embedding deployment
VECTOR_DIMENSIONS: Final[int] = 1536

# Vector profiles
COMPRESSION_PROFILE: Final[str] = "vector-profile-cosine-scalar"
VECTORIZABLE_PROFILE: Final[str] = "vector-profile-cosine-vectorizable"
VECTORIZER_NAME: Final[str] = "sharepoint-foundry-vectorizer"

# Compression
SCALAR_COMPRESSION: Final[str] = "scalar-quantization"
BINARY_COMPRESSION: Final[str] = "binary-quantization"
DEFAULT_OVERSAMPLING: Final[float] = 10

# HNSW / exhaustive-kNN algorithms
HNSW_M: Final[int] = 4
COSINE_ALGORITHM: Final[str] = "cosine"
HAMMING_ALGORITHM: Final[str] = "hamming"
EXHAUSTIVE_KNN_ALGORITHM: Final[str] = "exhaustive-knn"
HNSW_TUNING: Final[dict[str, dict[str, int]]] = {
    COSINE_ALGORITHM: {"ef_search": 500, "ef_construction": 400},
    HAMMING_ALGORITHM: {"ef_search": 800, "ef_construction": 800},
}

# Semantic ranking
SEMANTIC_CONFIGURATION: Final[str] = "semantic-search"

# Pull pipeline (datasource -> skillset -> indexer)
DATASOURCE_NAME: Final[str] = "sharepoint-foundry-datasource"
SKILLSET_NAME: Final[str] = "sharepoint-foundry-skillset"
INDEXER_NAME: Final[str] = "sharepoint-foundry-indexer"
SPLIT_SKILL_NAME: Final[str] = "split-skill"
EMBEDDING_SKILL_NAME: Final[str] = "ai-skill"
INDEXER_SCHEDULE: Final[timedelta] = timedelta(minutes=5)
MAXIMUM_PAGE_LENGTH: Final[int] = 2000
PAGE_OVERLAP_LENGTH: Final[int] = 500
MAXIMUM_PAGES_TO_TAKE: Final[int] = 0  # 0 = unlimited
DOCUMENT_CONTEXT: Final[str] = "/document"
ALL_DOCUMENT_PAGES: Final[str] = "/document/pages/*"
METADATA_STORAGE_PATH: Final[str] = "metadata_storage_path"
METADATA_STORAGE_LAST_MODIFIED: Final[str] = "metadata_storage_last_modified"

# Seconds to wait after a destructive admin call
SETTLE_SECONDS: Final[float] = 30

# Document analysis
LAYOUT_MODEL_ID: Final[str] = "prebuilt-layout"

# Blob storage
BLOB_CONTAINER: Final[str] = "sharepoint-ingestion"
BLOB_RETRY_ATTEMPTS: Final[int] = 5
BLOB_RETRY_BACKOFF_SECONDS: Final[int] = 30

# Content types by file extension
OCTET_STREAM: Final[str] = "application/octet-stream"
WORD_CONTENT_TYPE: Final[str] = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
EXCEL_CONTENT_TYPE: Final[str] = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
POWERPOINT_CONTENT_TYPE: Final[str] = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
CONTENT_TYPES: Final[dict[str, str]] = {
    ".pdf": "application/pdf",
    ".csv": "text/csv",
    ".json": "application/json",
    ".doc": WORD_CONTENT_TYPE,
    ".docx": WORD_CONTENT_TYPE,
    ".xls": EXCEL_CONTENT_TYPE,
    ".xlsx": EXCEL_CONTENT_TYPE,
    ".txt": "text/plain",
    ".ppt": POWERPOINT_CONTENT_TYPE,
    ".pptx": POWERPOINT_CONTENT_TYPE,
}

# Microsoft Graph
GRAPH_BASE_URL: Final[str] = "https://graph.microsoft.com/v1.0"
GRAPH_SCOPE: Final[str] = "https://graph.microsoft.com/.default"

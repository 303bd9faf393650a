"""
Index topology builder.

Assembles search index definitions (fields, vector algorithms, compressions,
profiles, vectorizers, semantic configuration) and the datasource, skillset
and indexer of the pull pipeline. Pure construction: nothing here talks to
the search service.

Dependencies: azure.search.documents
System role: Declarative source of every object the provisioning orchestrator deploys
"""

from dataclasses import dataclass

from azure.search.documents.indexes.models import (
    AzureOpenAIEmbeddingSkill,
    AzureOpenAIVectorizer,
    AzureOpenAIVectorizerParameters,
    BinaryQuantizationCompression,
    BlobIndexerParsingMode,
    BM25SimilarityAlgorithm,
    ExhaustiveKnnAlgorithmConfiguration,
    ExhaustiveKnnParameters,
    FieldMapping,
    HighWaterMarkChangeDetectionPolicy,
    HnswAlgorithmConfiguration,
    HnswParameters,
    IndexingParameters,
    IndexingParametersConfiguration,
    IndexingSchedule,
    IndexProjectionMode,
    InputFieldMappingEntry,
    LexicalAnalyzerName,
    OutputFieldMappingEntry,
    RescoringOptions,
    ScalarQuantizationCompression,
    ScalarQuantizationParameters,
    SearchField,
    SearchFieldDataType,
    SearchIndex,
    SearchIndexer,
    SearchIndexerDataContainer,
    SearchIndexerDataSourceConnection,
    SearchIndexerIndexProjection,
    SearchIndexerIndexProjectionSelector,
    SearchIndexerIndexProjectionsParameters,
    SearchIndexerSkillset,
    SemanticConfiguration,
    SemanticField,
    SemanticPrioritizedFields,
    SemanticSearch,
    SplitSkill,
    VectorSearch,
    VectorSearchAlgorithmMetric,
    VectorSearchCompressionRescoreStorageMethod,
    VectorSearchCompressionTarget,
    VectorSearchProfile,
)

from sharepoint_knowledge.configs.bundles import AzureFoundrySettings, AzureSearchSettings
from sharepoint_knowledge.core import constants

# Pull-pipeline index fields
TITLE = "title"
CHUNK = "chunk"
PARENT_ID = "parentId"
URL = "url"
CHUNK_ID = "chunkId"
TEXT_VECTOR = "textVector"
TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class PullPipelineTopology:
    """Datasource, skillset and indexer. Always deleted and recreated together."""

    data_source: SearchIndexerDataSourceConnection
    skillset: SearchIndexerSkillset
    indexer: SearchIndexer


def new_index(name: str) -> SearchIndex:
    """Empty index definition with an empty vector search container."""
    return SearchIndex(
        name=name,
        fields=[],
        vector_search=VectorSearch(algorithms=[], profiles=[], compressions=[], vectorizers=[]),
    )


def standard_field(
    name: str,
    data_type: str = SearchFieldDataType.String,
    *,
    key: bool = False,
    filterable: bool = False,
    sortable: bool = False,
    facetable: bool = False,
    searchable: bool = False,
    analyzer_name: str | None = None,
) -> SearchField:
    return SearchField(
        name=name,
        type=data_type,
        key=key,
        hidden=False,
        stored=True,
        filterable=filterable,
        sortable=sortable,
        facetable=facetable,
        searchable=searchable,
        analyzer_name=analyzer_name,
    )


def vector_field(name: str, profile_name: str, stored: bool = True) -> SearchField:
    return SearchField(
        name=name,
        type=SearchFieldDataType.Collection(SearchFieldDataType.Single),
        hidden=False,
        stored=stored,
        searchable=True,
        vector_search_dimensions=constants.VECTOR_DIMENSIONS,
        vector_search_profile_name=profile_name,
    )


def add_hnsw_algorithm(index: SearchIndex, name: str, metric: str) -> None:
    tuning = constants.HNSW_TUNING[name]
    index.vector_search.algorithms.append(
        HnswAlgorithmConfiguration(
            name=name,
            parameters=HnswParameters(
                m=constants.HNSW_M,
                ef_construction=tuning["ef_construction"],
                ef_search=tuning["ef_search"],
                metric=metric,
            ),
        )
    )


def add_exhaustive_knn_algorithm(index: SearchIndex, name: str, metric: str) -> None:
    index.vector_search.algorithms.append(
        ExhaustiveKnnAlgorithmConfiguration(name=name, parameters=ExhaustiveKnnParameters(metric=metric))
    )


def _rescoring(storage_method: str) -> RescoringOptions:
    return RescoringOptions(
        enable_rescoring=True,
        default_oversampling=constants.DEFAULT_OVERSAMPLING,
        rescore_storage_method=storage_method,
    )


def add_scalar_compression(index: SearchIndex, name: str) -> None:
    """Int8 scalar quantization keeping the original vectors for rescoring."""
    index.vector_search.compressions.append(
        ScalarQuantizationCompression(
            compression_name=name,
            rescoring_options=_rescoring(VectorSearchCompressionRescoreStorageMethod.PRESERVE_ORIGINALS),
            parameters=ScalarQuantizationParameters(quantized_data_type=VectorSearchCompressionTarget.INT8),
        )
    )


def add_binary_compression(index: SearchIndex, name: str) -> None:
    """Binary quantization discarding the original vectors."""
    index.vector_search.compressions.append(
        BinaryQuantizationCompression(
            compression_name=name,
            rescoring_options=_rescoring(VectorSearchCompressionRescoreStorageMethod.DISCARD_ORIGINALS),
        )
    )


def add_vector_profile(
    index: SearchIndex,
    name: str,
    algorithm_name: str,
    compression_name: str | None = None,
    vectorizer_name: str | None = None,
) -> None:
    index.vector_search.profiles.append(
        VectorSearchProfile(
            name=name,
            algorithm_configuration_name=algorithm_name,
            compression_name=compression_name,
            vectorizer_name=vectorizer_name,
        )
    )


def storage_connection_string(resource_id: str) -> str:
    """Managed-identity connection string for a storage account resource ID."""
    if resource_id.startswith("ResourceId="):
        return resource_id
    return f"ResourceId={resource_id};"


def _document_path(field: str) -> str:
    return f"{constants.DOCUMENT_CONTEXT}/{field}"


def _page_path(field: str) -> str:
    return f"{constants.ALL_DOCUMENT_PAGES}/{field}"


class TopologyBuilder:
    """Builds index and pull-pipeline definitions bound to one deployment's settings."""

    def __init__(
        self,
        foundry: AzureFoundrySettings,
        search: AzureSearchSettings,
        container: str = constants.BLOB_CONTAINER,
    ) -> None:
        self._foundry = foundry
        self._search = search
        self._container = container

    def build_prevectorized(self, index: SearchIndex) -> SearchIndex:
        """
        Populate an index for chunks vectorized by the caller.

        Two compressions, two HNSW algorithms and an exhaustive-kNN fallback,
        one compressed cosine profile, nine standard fields and two vector fields.
        """
        add_binary_compression(index, constants.BINARY_COMPRESSION)
        add_scalar_compression(index, constants.SCALAR_COMPRESSION)

        add_hnsw_algorithm(index, constants.COSINE_ALGORITHM, VectorSearchAlgorithmMetric.COSINE)
        add_hnsw_algorithm(index, constants.HAMMING_ALGORITHM, VectorSearchAlgorithmMetric.HAMMING)
        add_exhaustive_knn_algorithm(
            index, constants.EXHAUSTIVE_KNN_ALGORITHM, VectorSearchAlgorithmMetric.EUCLIDEAN
        )

        add_vector_profile(
            index,
            constants.COMPRESSION_PROFILE,
            constants.COSINE_ALGORITHM,
            compression_name=constants.SCALAR_COMPRESSION,
        )

        index.fields.extend(
            [
                standard_field("id", key=True, filterable=True, sortable=True),
                standard_field("url", sortable=True, searchable=True),
                standard_field("name", sortable=True, searchable=True),
                standard_field("itemId", filterable=True, sortable=True, facetable=True, searchable=True),
                standard_field("title", sortable=True, searchable=True),
                standard_field("driveId", filterable=True, sortable=True, facetable=True, searchable=True),
                standard_field(
                    "pageNumber",
                    SearchFieldDataType.Int32,
                    filterable=True,
                    sortable=True,
                ),
                standard_field("securityData"),
                standard_field(
                    "content",
                    searchable=True,
                    analyzer_name=LexicalAnalyzerName.EN_MICROSOFT,
                ),
                vector_field("titleVector", constants.COMPRESSION_PROFILE, stored=True),
                vector_field("contentVector", constants.COMPRESSION_PROFILE, stored=False),
            ]
        )
        return index

    def build_pull_pipeline(self, index: SearchIndex) -> SearchIndex:
        """Populate an index fed by the indexer, with semantic ranking and a query-time vectorizer."""
        index.similarity = BM25SimilarityAlgorithm()
        index.semantic_search = SemanticSearch(
            default_configuration_name=constants.SEMANTIC_CONFIGURATION,
            configurations=[
                SemanticConfiguration(
                    name=constants.SEMANTIC_CONFIGURATION,
                    prioritized_fields=SemanticPrioritizedFields(
                        title_field=SemanticField(field_name=TITLE),
                        content_fields=[SemanticField(field_name=CHUNK)],
                    ),
                )
            ],
        )

        add_hnsw_algorithm(index, constants.COSINE_ALGORITHM, VectorSearchAlgorithmMetric.COSINE)
        index.vector_search.vectorizers.append(
            AzureOpenAIVectorizer(
                vectorizer_name=constants.VECTORIZER_NAME,
                parameters=AzureOpenAIVectorizerParameters(
                    resource_url=self._foundry.openai_endpoint,
                    deployment_name=self._foundry.embedding_model,
                    api_key=self._foundry.account_key,
                    model_name=self._foundry.embedding_model,
                ),
            )
        )
        add_vector_profile(
            index,
            constants.VECTORIZABLE_PROFILE,
            constants.COSINE_ALGORITHM,
            vectorizer_name=constants.VECTORIZER_NAME,
        )

        index.fields.extend(
            [
                standard_field(TITLE, searchable=True),
                standard_field(CHUNK, searchable=True),
                standard_field(PARENT_ID, filterable=True),
                standard_field(URL, filterable=True, searchable=True, analyzer_name=LexicalAnalyzerName.KEYWORD),
                standard_field(
                    CHUNK_ID,
                    key=True,
                    sortable=True,
                    searchable=True,
                    analyzer_name=LexicalAnalyzerName.KEYWORD,
                ),
                vector_field(TEXT_VECTOR, constants.VECTORIZABLE_PROFILE),
                standard_field(TIMESTAMP, SearchFieldDataType.DateTimeOffset),
            ]
        )
        return index

    def build_data_source(self) -> SearchIndexerDataSourceConnection:
        return SearchIndexerDataSourceConnection(
            name=constants.DATASOURCE_NAME,
            type="azureblob",
            connection_string=storage_connection_string(self._search.storage_resource_id),
            container=SearchIndexerDataContainer(name=self._container),
            data_change_detection_policy=HighWaterMarkChangeDetectionPolicy(
                high_water_mark_column_name=constants.METADATA_STORAGE_LAST_MODIFIED,
            ),
        )

    def build_skillset(self, index_name: str) -> SearchIndexerSkillset:
        """Split each document into pages, embed each page, project pages into the index."""
        split_skill = SplitSkill(
            name=constants.SPLIT_SKILL_NAME,
            context=constants.DOCUMENT_CONTEXT,
            inputs=[InputFieldMappingEntry(name="text", source=_document_path("content"))],
            outputs=[OutputFieldMappingEntry(name="textItems", target_name="pages")],
            text_split_mode="pages",
            default_language_code="en",
            maximum_page_length=constants.MAXIMUM_PAGE_LENGTH,
            page_overlap_length=constants.PAGE_OVERLAP_LENGTH,
            maximum_pages_to_take=constants.MAXIMUM_PAGES_TO_TAKE,
        )
        embedding_skill = AzureOpenAIEmbeddingSkill(
            name=constants.EMBEDDING_SKILL_NAME,
            context=constants.ALL_DOCUMENT_PAGES,
            inputs=[InputFieldMappingEntry(name="text", source=constants.ALL_DOCUMENT_PAGES)],
            outputs=[OutputFieldMappingEntry(name="embedding", target_name=TEXT_VECTOR)],
            resource_url=self._foundry.openai_endpoint,
            deployment_name=self._foundry.embedding_model,
            api_key=self._foundry.account_key,
            model_name=self._foundry.embedding_model,
            dimensions=constants.VECTOR_DIMENSIONS,
        )
        projection = SearchIndexerIndexProjection(
            selectors=[
                SearchIndexerIndexProjectionSelector(
                    target_index_name=index_name,
                    parent_key_field_name=PARENT_ID,
                    source_context=constants.ALL_DOCUMENT_PAGES,
                    mappings=[
                        InputFieldMappingEntry(name=CHUNK, source=constants.ALL_DOCUMENT_PAGES),
                        InputFieldMappingEntry(name=TEXT_VECTOR, source=_page_path(TEXT_VECTOR)),
                        InputFieldMappingEntry(name=URL, source=_document_path(URL)),
                        InputFieldMappingEntry(name=TITLE, source=_document_path(TITLE)),
                        InputFieldMappingEntry(name=TIMESTAMP, source=_document_path(TIMESTAMP)),
                    ],
                )
            ],
            parameters=SearchIndexerIndexProjectionsParameters(
                projection_mode=IndexProjectionMode.SKIP_INDEXING_PARENT_DOCUMENTS,
            ),
        )
        return SearchIndexerSkillset(
            name=constants.SKILLSET_NAME,
            skills=[split_skill, embedding_skill],
            index_projection=projection,
        )

    def build_indexer(self, index_name: str) -> SearchIndexer:
        return SearchIndexer(
            name=constants.INDEXER_NAME,
            data_source_name=constants.DATASOURCE_NAME,
            target_index_name=index_name,
            skillset_name=constants.SKILLSET_NAME,
            schedule=IndexingSchedule(interval=constants.INDEXER_SCHEDULE),
            field_mappings=[
                FieldMapping(source_field_name=constants.METADATA_STORAGE_PATH, target_field_name=TITLE),
                FieldMapping(
                    source_field_name=constants.METADATA_STORAGE_LAST_MODIFIED,
                    target_field_name=TIMESTAMP,
                ),
            ],
            parameters=IndexingParameters(
                configuration=IndexingParametersConfiguration(
                    parsing_mode=BlobIndexerParsingMode.DEFAULT,
                    query_timeout=None,
                ),
            ),
        )

    def build_pipeline(self, index_name: str) -> PullPipelineTopology:
        return PullPipelineTopology(
            data_source=self.build_data_source(),
            skillset=self.build_skillset(index_name),
            indexer=self.build_indexer(index_name),
        )

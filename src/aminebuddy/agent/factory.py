from ..config import Settings
from ..errors import ConfigurationError
from ..knowledge import create_embedding_provider, create_knowledge_store
from ..llm import create_llm_provider
from .data_structures import AgentOverrides
from .portfolio_agent import PortfolioAgent
from .tools import KnowledgeBaseTool


async def create_portfolio_agent(
    settings: Settings,
    overrides: AgentOverrides | None = None
) -> PortfolioAgent:
    """Build a connected PortfolioAgent from settings.

    Embeddings always use OpenAI, so OPENAI_API_KEY is required even when
    answers come from another provider.

    Args:
        settings: Loaded configuration
        overrides: Optional model/temperature/top_k overrides

    Returns:
        Agent with an open knowledge store connection

    Raises:
        ConfigurationError: If credentials are missing
        ConnectionError: If the knowledge store is unreachable
    """
    overrides = overrides or AgentOverrides()
    model_settings = settings.model

    if not model_settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is not set in environment variables")
    if not model_settings.api_key:
        raise ConfigurationError(
            f"API key for LLM provider '{model_settings.provider}' is not set in environment variables"
        )

    embedder = create_embedding_provider(
        "openai",
        api_key=model_settings.openai_api_key,
        model=model_settings.embedding_model
    )
    store = create_knowledge_store(
        "postgres",
        **settings.database.model_dump(),
        embedding_dimension=embedder.dimension
    )
    try:
        await store.connect()
    except ConnectionError:
        await embedder.close()
        raise

    llm = create_llm_provider(
        model_settings.provider,
        api_key=model_settings.api_key,
        model=overrides.model or model_settings.model_name
    )

    top_k = overrides.top_k or settings.retrieval.top_k
    tool = KnowledgeBaseTool(
        store,
        embedder,
        namespace=settings.retrieval.namespace,
        default_limit=top_k
    )

    temperature = overrides.temperature
    if temperature is None:
        temperature = model_settings.temperature

    return PortfolioAgent(
        retrieval_tool=tool,
        llm=llm,
        retrieval_limit=top_k,
        temperature=temperature
    )

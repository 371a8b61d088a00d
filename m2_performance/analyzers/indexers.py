"""Search engine and indexer configuration."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


SUPPORTED_ENGINES = ("elasticsearch7", "elasticsearch8", "opensearch")


class IndexersAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "indexing"
    
    def analyze(self) -> None:
        self.check_search_engine()
        self.check_indexer_mode()
    
    def check_search_engine(self):
        engine = str(self.config_value("catalog/search/engine", "") or "")
        
        if not engine or engine == "mysql":
            self.recommend(
                "Configure a dedicated search engine",
                Priority.HIGH,
                "Catalog search is not backed by Elasticsearch or OpenSearch.",
                "MySQL search was removed in Magento 2.4. Configure OpenSearch with: "
                "bin/magento config:set catalog/search/engine opensearch",
                area="search"
            )
        elif engine not in SUPPORTED_ENGINES:
            self.recommend(
                "Unrecognized search engine",
                Priority.MEDIUM,
                f"catalog/search/engine is set to '{engine}'.",
                area="search"
            )
        elif engine.startswith("elasticsearch"):
            self.recommend(
                "Consider OpenSearch",
                Priority.LOW,
                f"Using {engine}. OpenSearch is the engine supported by current Magento releases.",
                area="search"
            )
    
    def check_indexer_mode(self):
        # Indexer modes live in the mview_state table, env.php only lists overrides
        realtime = [
            code for code, mode in (self.deployment_value("indexer/mode", {}) or {}).items()
            if mode == "realtime"
        ]
        if realtime and not self.is_in_developer_mode():
            self.recommend(
                "Switch indexers to Update by Schedule",
                Priority.MEDIUM,
                "Indexers set to Update on Save: " + ", ".join(sorted(realtime)),
                "Update on Save reindexes inside the admin save request. "
                "Switch with: bin/magento indexer:set-mode schedule"
            )

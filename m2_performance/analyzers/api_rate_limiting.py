"""API exposure and rate limiting checks."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


class APIRateLimitingAnalyzer(ModeAware, BaseAnalyzer):
    """Checks input limits for REST/GraphQL and guest API access."""
    
    area = "api-security"
    
    def analyze(self) -> None:
        if str(self.config_value("webapi/webapisecurity/allow_insecure", "0")) == "1":
            self.recommend(
                "Disallow anonymous access to sensitive API resources",
                Priority.HIGH,
                "webapi/webapisecurity/allow_insecure is enabled, exposing store configuration and CMS data anonymously.",
                "Set with: bin/magento config:set webapi/webapisecurity/allow_insecure 0"
            )
        
        if str(self.config_value("webapi/validation/input_limit_enabled", "0")) != "1":
            self.recommend(
                "Enable API input limits",
                Priority.MEDIUM,
                "REST and GraphQL requests are not bounded in size.",
                "Input limits stop oversized payloads from tying up PHP workers. "
                "Set with: bin/magento config:set webapi/validation/input_limit_enabled 1"
            )
        
        page_size = int(self.config_value("webapi/validation/maximum_page_size", 0) or 0)
        if page_size > 300:
            self.recommend(
                "Reduce maximum API page size",
                Priority.LOW,
                f"webapi/validation/maximum_page_size is {page_size}. Large pages make single API calls expensive."
            )
        
        depth = int(self.deployment_value("graphql/query_depth", 0) or 0)
        complexity = int(self.deployment_value("graphql/query_complexity", 0) or 0)
        if not depth or not complexity:
            self.recommend(
                "Limit GraphQL query depth and complexity",
                Priority.LOW if self.is_in_developer_mode() else Priority.MEDIUM,
                "GraphQL query_depth or query_complexity is not limited in env.php.",
                "Unbounded nested queries can load entire catalogs in one request."
            )

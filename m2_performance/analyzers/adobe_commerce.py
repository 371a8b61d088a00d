"""Adobe Commerce (enterprise edition) feature checks."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


B2B_MODULES = (
    "Magento_Company",
    "Magento_SharedCatalog",
    "Magento_RequisitionList",
    "Magento_NegotiableQuote",
)


class AdobeCommerceAnalyzer(ModeAware, BaseAnalyzer):
    """Only registered for enterprise installations."""
    
    area = "commerce"
    
    def analyze(self) -> None:
        if not self.snapshot.is_enterprise:
            return
        
        modules = self.snapshot.modules
        b2b = [name for name in B2B_MODULES if modules.get(name)]
        if b2b and str(self.config_value("btob/website_configuration/company_active", "0")) != "1":
            self.recommend(
                "Disable unused B2B modules",
                Priority.MEDIUM,
                "B2B modules are enabled but companies are not active: " + ", ".join(b2b),
                "Shared catalog and company modules add permission checks to every catalog query.",
                metadata={"modules": b2b}
            )
        
        if str(self.config_value("sales/magento_salesarchive/active", "0")) != "1":
            self.recommend(
                "Enable order archiving",
                Priority.LOW,
                "Archiving moves old orders out of the sales grids, keeping admin grids fast.",
                "Set with: bin/magento config:set sales/magento_salesarchive/active 1"
            )
        
        if str(self.config_value("cms/pagebuilder/lazy_loading", "1")) != "1":
            self.recommend(
                "Enable Page Builder lazy loading",
                Priority.LOW if self.is_in_developer_mode() else Priority.MEDIUM,
                "Page Builder images load eagerly."
            )
        
        if modules.get("Magento_Staging") and not self.deployment_value("cron_consumers_runner/cron_run"):
            self.recommend(
                "Run message queue consumers from cron",
                Priority.LOW,
                "Content staging relies on queue consumers. Enable cron_consumers_runner in env.php."
            )

"""Admin hardening checks that also affect store availability."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


PREDICTABLE_ADMIN_PATHS = ("admin", "backend", "administrator")


class SecurityChecklistAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "security"
    
    def analyze(self) -> None:
        modules = self.snapshot.modules
        if modules and not modules.get("Magento_TwoFactorAuth"):
            self.recommend(
                "Enable two-factor authentication for admin",
                Priority.LOW if self.is_in_developer_mode() else Priority.HIGH,
                "Magento_TwoFactorAuth is disabled. Admin accounts are protected by password only."
            )
        
        front_name = str(self.deployment_value("backend/frontName", "") or "")
        if front_name.lower() in PREDICTABLE_ADMIN_PATHS:
            self.recommend(
                "Use a custom admin URL",
                Priority.HIGH,
                f"The admin path '/{front_name}' is predictable and attracts brute force traffic.",
                "Change with: bin/magento setup:config:set --backend-frontname=<custom>"
            )
        
        if str(self.config_value("admin/security/use_form_key", "1")) != "1":
            self.recommend(
                "Enable admin form keys",
                Priority.HIGH,
                "Admin form keys protect against cross site request forgery."
            )
        
        lifetime = int(self.config_value("admin/security/session_lifetime", 0) or 0)
        if lifetime > 86400:
            self.recommend(
                "Shorten admin session lifetime",
                Priority.MEDIUM,
                f"Admin sessions last {lifetime} seconds."
            )
        
        if str(self.config_value("dev/debug/template_hints_storefront", "0")) == "1":
            self.recommend(
                "Disable storefront template hints",
                Priority.HIGH,
                "Template hints expose theme structure and slow down rendering."
            )

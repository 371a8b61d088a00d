"""Test analyzer implementations against prepared snapshots."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from m2_performance.analyzers import (
    APIRateLimitingAnalyzer, AdobeCommerceAnalyzer, CacheAnalyzer, CodebaseAnalyzer,
    ConfigurationAnalyzer, DatabaseAnalyzer, FrontendAnalyzer, HttpProtocolAnalyzer,
    IndexersAnalyzer, LayoutCacheAnalyzer, ModulesAnalyzer, OpCacheAnalyzer,
    ModeAware, RedisAnalyzer, SecurityChecklistAnalyzer, UptimeAnalyzer,
    VarnishPerformanceAnalyzer
)
from m2_performance.models.data_models import Priority
from m2_performance.utils.php_cli import PhpCliError


def run(analyzer_class, snapshot, collector, aware=False, **kwargs):
    analyzer = analyzer_class(snapshot.root, snapshot, collector, **kwargs)
    if isinstance(analyzer, ModeAware):
        analyzer.set_magento_mode(snapshot.mode)
        analyzer.set_dev_mode_aware(aware)
    analyzer.analyze()
    return {r.title: r for r in collector.get_recommendations()}


class TestConfigurationAnalyzer:
    
    def test_production_findings(self, snapshot, collector):
        found = run(ConfigurationAnalyzer, snapshot, collector)
        
        assert found["Enable asynchronous sending of sales emails"].priority == Priority.MEDIUM
        assert found["Enable asynchronous grid indexing"].priority == Priority.MEDIUM
        assert found["Use Redis for session storage"].priority == Priority.MEDIUM
        assert found["Configure Redis for cache storage"].priority == Priority.HIGH
        assert all(r.area == "config" for r in found.values())
    
    def test_developer_mode_unacknowledged(self, developer_snapshot, collector):
        found = run(ConfigurationAnalyzer, developer_snapshot, collector)
        
        assert found["Switch from developer mode to production mode"].priority == Priority.HIGH
    
    def test_developer_mode_acknowledged(self, developer_snapshot, collector):
        found = run(ConfigurationAnalyzer, developer_snapshot, collector, aware=True)
        
        assert found["Developer Mode - Analysis adjusted"].priority == Priority.LOW
        assert "Enable asynchronous sending of sales emails" not in found
        assert found["Enable asynchronous grid indexing"].priority == Priority.LOW
    
    def test_customer_segments_enterprise_only(self, snapshot, collector):
        snapshot.config["customer/magento_customersegment/real_time_validation"] = "1"
        assert "Disable real-time customer segment validation" not in run(
            ConfigurationAnalyzer, snapshot, collector
        )
        
        enterprise = snapshot.model_copy(update={"is_enterprise": True})
        collector.clear()
        assert "Disable real-time customer segment validation" in run(
            ConfigurationAnalyzer, enterprise, collector
        )


class TestCacheAnalyzer:
    
    def test_production(self, snapshot, collector):
        found = run(CacheAnalyzer, snapshot, collector)
        
        disabled = found["Enable all cache types for production"]
        assert disabled.priority == Priority.HIGH
        assert disabled.metadata == {"disabled_cache_types": ["full_page"]}
        assert found["Increase Full Page Cache TTL"].priority == Priority.MEDIUM
        assert "Use Varnish for full page cache" not in found
    
    def test_builtin_fpc(self, snapshot, collector):
        snapshot.config["system/full_page_cache/caching_application"] = "1"
        found = run(CacheAnalyzer, snapshot, collector)
        
        assert found["Use Varnish for full page cache"].priority == Priority.HIGH
    
    def test_developer_mode(self, developer_snapshot, collector):
        found = run(CacheAnalyzer, developer_snapshot, collector, aware=True)
        
        assert found["Varnish not required in development"].priority == Priority.LOW
        assert found["Enable performance caches for development"].priority == Priority.LOW
        assert "Enable all cache types for production" not in found
    
    def test_fastly(self, snapshot, collector):
        fastly = snapshot.model_copy(update={"composer": {"require": {"fastly/magento2": "^1.2"}}})
        found = run(CacheAnalyzer, fastly, collector)
        
        assert "Fastly CDN detected - excellent choice" in found
        assert "Use Varnish for full page cache" not in found


class TestDatabaseAnalyzer:
    
    def test_profiler(self, snapshot, collector):
        found = run(DatabaseAnalyzer, snapshot, collector)
        
        assert found["Disable database profiler"].priority == Priority.HIGH
    
    def test_no_connection(self, snapshot, collector):
        empty = snapshot.model_copy(update={"deployment": {}})
        assert run(DatabaseAnalyzer, empty, collector) == {}


class TestModulesAnalyzer:
    
    def test_dev_module_enabled(self, snapshot, collector):
        found = run(ModulesAnalyzer, snapshot, collector)
        
        assert found["Disable development modules"].files == ("app/etc/config.php",)
        assert "Remove disabled modules" not in found
    
    def test_many_disabled(self, snapshot, collector):
        modules = {f"Vendor_Module{i}": 0 for i in range(6)}
        found = run(ModulesAnalyzer, snapshot.model_copy(update={"modules": modules}), collector)
        
        rec = found["Remove disabled modules"]
        assert rec.priority == Priority.HIGH
        assert rec.has_files()
        assert len(rec.metadata["disabled_modules"]) == 6


class TestSecurityChecklistAnalyzer:
    
    def test_findings(self, snapshot, collector):
        found = run(SecurityChecklistAnalyzer, snapshot, collector)
        
        assert found["Enable two-factor authentication for admin"].priority == Priority.HIGH
        assert found["Use a custom admin URL"].priority == Priority.HIGH
        assert all(r.area == "security" for r in found.values())


class TestFrontendAnalyzer:
    
    def test_minification(self, snapshot, collector):
        found = run(FrontendAnalyzer, snapshot, collector)
        
        assert "Enable JavaScript minification" in found
        assert "Enable HTML minification" not in found
        assert "Enable CSS minification" not in found
    
    def test_skipped_in_developer_mode(self, developer_snapshot, collector):
        found = run(FrontendAnalyzer, developer_snapshot, collector, aware=True)
        
        assert list(found) == ["Frontend optimizations skipped in developer mode"]


class TestIndexersAnalyzer:
    
    def test_opensearch(self, snapshot, collector):
        assert run(IndexersAnalyzer, snapshot, collector) == {}
    
    def test_mysql_search(self, snapshot, collector):
        snapshot.config["catalog/search/engine"] = "mysql"
        found = run(IndexersAnalyzer, snapshot, collector)
        
        rec = found["Configure a dedicated search engine"]
        assert rec.priority == Priority.HIGH
        assert rec.area == "search"


class TestOpCacheAnalyzer:
    
    def test_weak_settings(self, snapshot, collector):
        settings = {
            "loaded": True,
            "enable": "1",
            "memory_consumption": "128",
            "max_accelerated_files": "10000",
            "validate_timestamps": "1",
            "interned_strings_buffer": "8",
        }
        with patch.object(OpCacheAnalyzer, "read_settings", return_value=settings):
            found = run(OpCacheAnalyzer, snapshot, collector)
        
        assert found["Increase OPcache memory"].metadata == {"current": 128, "recommended": 512}
        assert "Increase opcache.max_accelerated_files" in found
        assert "Disable opcache.validate_timestamps" in found
        assert "Enable OPcache" not in found
    
    def test_not_loaded(self, snapshot, collector):
        with patch.object(OpCacheAnalyzer, "read_settings", return_value={"loaded": False}):
            found = run(OpCacheAnalyzer, snapshot, collector)
        
        assert list(found) == ["Install the OPcache extension"]
    
    def test_php_unavailable(self, snapshot, collector):
        with patch.object(OpCacheAnalyzer, "read_settings", side_effect=PhpCliError("php not found")):
            assert run(OpCacheAnalyzer, snapshot, collector) == {}


class TestRedisAnalyzer:
    
    def test_session_not_configured(self, snapshot, collector):
        found = run(RedisAnalyzer, snapshot, collector)
        
        assert found["Configure Redis for session storage"].priority == Priority.HIGH
    
    def test_session_tuning(self, snapshot, collector):
        deployment = {
            "session": {"save": "redis", "redis": {
                "disable_locking": "0", "compression_lib": "gzip", "timeout": "1",
            }},
            "cache": {"frontend": {"default": {
                "backend": "Magento\\Framework\\Cache\\Backend\\Redis",
                "backend_options": {"server": "10.0.0.5", "port": "6379"},
            }}},
        }
        with patch("m2_performance.analyzers.redis.is_port_open", return_value=False):
            found = run(RedisAnalyzer, snapshot.model_copy(update={"deployment": deployment}), collector)
        
        assert found["Disable Redis session locking"].priority == Priority.HIGH
        assert found["Switch to LZ4 compression"].priority == Priority.LOW
        assert found["Increase Redis timeout"].priority == Priority.MEDIUM
        assert "Enable Redis persistent connections" in found
        assert found["Redis cache backend 'default' unreachable"].metadata["host"] == "10.0.0.5"


class TestVarnishPerformanceAnalyzer:
    
    def test_not_configured(self, snapshot, collector):
        found = run(VarnishPerformanceAnalyzer, snapshot, collector)
        
        assert found["Varnish not configured"].priority == Priority.HIGH
        assert found["Varnish not configured"].area == "varnish"
    
    def test_unreachable_host(self, snapshot, collector):
        snapshot.deployment["http_cache_hosts"] = [{"host": "10.0.0.9", "port": "6081"}]
        with patch("m2_performance.analyzers.varnish.is_port_open", return_value=False) as probe:
            found = run(VarnishPerformanceAnalyzer, snapshot, collector)
        
        probe.assert_called_once_with("10.0.0.9", "6081")
        assert found["Varnish host unreachable"].metadata == {"unreachable_hosts": ["10.0.0.9:6081"]}
    
    def test_skipped_in_developer_mode(self, developer_snapshot, collector):
        assert run(VarnishPerformanceAnalyzer, developer_snapshot, collector, aware=True) == {}


class TestLayoutCacheAnalyzer:
    
    def test_cacheable_false(self, snapshot, collector, magento_root):
        layout = magento_root / "app" / "code" / "Acme" / "Promo" / "view" / "frontend" / "layout"
        layout.mkdir(parents=True)
        (layout / "default.xml").write_text('<block name="promo" cacheable="false"/>')
        (layout / "catalog_product_view.xml").write_text('<block name="x" cacheable="false"/>')
        (layout / "cms_index_index.xml").write_text('<block name="y"/>')
        
        core = magento_root / "vendor" / "magento" / "module-checkout" / "view" / "frontend" / "layout"
        core.mkdir(parents=True)
        (core / "default.xml").write_text('<block cacheable="false"/>')
        
        found = run(LayoutCacheAnalyzer, snapshot, collector)
        
        assert found['Remove cacheable="false" from default.xml'].files == (
            "app/code/Acme/Promo/view/frontend/layout/default.xml",
        )
        assert found["Review uncacheable layout handles"].priority == Priority.MEDIUM
        assert all(r.area == "caching" for r in found.values())


class TestCodebaseAnalyzer:
    
    def test_object_manager_usage(self, snapshot, collector, magento_root):
        module = magento_root / "app" / "code" / "Acme" / "Promo" / "Model"
        module.mkdir(parents=True)
        (module / "Rule.php").write_text(
            "<?php $om = \\Magento\\Framework\\App\\ObjectManager::getInstance();"
        )
        (module / "Clean.php").write_text("<?php class Clean {}")
        
        found = run(CodebaseAnalyzer, snapshot, collector)
        
        rec = found["Avoid direct ObjectManager usage"]
        assert rec.priority == Priority.LOW
        assert rec.files == ("app/code/Acme/Promo/Model/Rule.php",)


class TestHttpProtocolAnalyzer:
    
    def test_nginx_without_http2(self, snapshot, collector, magento_root):
        (magento_root / "nginx.conf").write_text("server {\n  listen 443 ssl;\n  gzip on;\n}\n")
        found = run(HttpProtocolAnalyzer, snapshot, collector)
        
        assert "Enable HTTP/2" in found
        assert "Enable gzip compression" not in found
        assert "Serve the store over HTTPS" not in found
    
    def test_insecure_base_url(self, snapshot, collector):
        snapshot.config["web/secure/base_url"] = "http://shop.example.com/"
        found = run(HttpProtocolAnalyzer, snapshot, collector)
        
        assert found["Serve the store over HTTPS"].priority == Priority.HIGH


class TestAPIRateLimitingAnalyzer:
    
    def test_defaults(self, snapshot, collector):
        found = run(APIRateLimitingAnalyzer, snapshot, collector)
        
        assert found["Enable API input limits"].priority == Priority.MEDIUM
        assert found["Limit GraphQL query depth and complexity"].priority == Priority.MEDIUM
        assert all(r.area == "api-security" for r in found.values())


class TestAdobeCommerceAnalyzer:
    
    def test_open_source_is_skipped(self, snapshot, collector):
        assert run(AdobeCommerceAnalyzer, snapshot, collector) == {}
    
    def test_enterprise(self, snapshot, collector):
        modules = dict(snapshot.modules, Magento_Company=1, Magento_SharedCatalog=1)
        enterprise = snapshot.model_copy(update={"is_enterprise": True, "modules": modules})
        found = run(AdobeCommerceAnalyzer, enterprise, collector)
        
        assert found["Disable unused B2B modules"].metadata == {
            "modules": ["Magento_Company", "Magento_SharedCatalog"]
        }
        assert "Enable order archiving" in found


class TestUptimeAnalyzer:
    
    @pytest.fixture
    def host(self):
        with patch("m2_performance.analyzers.uptime.psutil") as mock_psutil, \
                patch("m2_performance.analyzers.uptime.time") as mock_time:
            mock_time.time.return_value = 100000.0
            mock_psutil.boot_time.return_value = 0.0
            mock_psutil.cpu_count.return_value = 4
            mock_psutil.getloadavg.return_value = (1.0, 1.0, 1.0)
            mock_psutil.virtual_memory.return_value = SimpleNamespace(percent=50.0, total=8 * 1024 ** 3)
            yield mock_psutil, mock_time
    
    def test_healthy_host(self, snapshot, collector, host):
        assert run(UptimeAnalyzer, snapshot, collector) == {}
    
    def test_pressure(self, snapshot, collector, host):
        mock_psutil, mock_time = host
        mock_time.time.return_value = 600.0
        mock_psutil.getloadavg.return_value = (6.0, 4.0, 2.0)
        mock_psutil.virtual_memory.return_value = SimpleNamespace(percent=85.0, total=8 * 1024 ** 3)
        
        found = run(UptimeAnalyzer, snapshot, collector)
        
        assert found["Recent server restart"].priority == Priority.HIGH
        assert found["High system load"].metadata["cpus"] == 4
        assert found["High memory usage"].priority == Priority.MEDIUM
        assert all(r.area == "system" for r in found.values())

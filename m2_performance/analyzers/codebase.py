"""Custom code volume and extensibility hot spots under app/code."""

import re
from pathlib import Path
from typing import List

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


FILE_THRESHOLD = 1000
DEV_FILE_THRESHOLD = 2000
OBSERVER_THRESHOLD = 50
PLUGIN_THRESHOLD = 50
OBJECT_MANAGER_LIMIT = 10

OBJECT_MANAGER_PATTERN = re.compile(r"ObjectManager::getInstance\(\)")
OBSERVER_PATTERN = re.compile(r"<observer\b")
PLUGIN_PATTERN = re.compile(r"<plugin\b")


class CodebaseAnalyzer(ModeAware, BaseAnalyzer):
    """Counts files, observers, plugins and direct ObjectManager usage."""
    
    area = "codebase"
    
    def analyze(self) -> None:
        code_dir = self.root / "app" / "code"
        if not code_dir.is_dir():
            return
        
        php_files = list(code_dir.rglob("*.php"))
        self.check_file_count(php_files)
        self.check_xml_declarations(code_dir, "events.xml", OBSERVER_PATTERN, "observers", OBSERVER_THRESHOLD)
        self.check_xml_declarations(code_dir, "di.xml", PLUGIN_PATTERN, "plugins", PLUGIN_THRESHOLD)
        self.check_object_manager(php_files)
    
    def check_file_count(self, php_files: List[Path]):
        threshold = DEV_FILE_THRESHOLD if self.is_in_developer_mode() else FILE_THRESHOLD
        if len(php_files) > threshold:
            self.recommend(
                "Large custom codebase",
                Priority.MEDIUM,
                f"app/code contains {len(php_files)} PHP files (threshold {threshold}).",
                "Every custom class adds to DI compilation and autoloading. Consider moving stable modules "
                "into composer packages and removing unused code.",
                metadata={"php_files": len(php_files)}
            )
    
    def check_xml_declarations(self, code_dir: Path, filename: str, pattern, label: str, threshold: int):
        count = 0
        files = []
        for path in code_dir.rglob(filename):
            found = len(pattern.findall(self._read(path)))
            if found:
                count += found
                files.append(self.relative(path))
        
        if count > threshold:
            self.recommend(
                f"High number of {label}",
                Priority.MEDIUM,
                f"Found {count} {label} declared in custom modules.",
                f"Each of the {label} runs inside the request path of the code it hooks into.",
                files=files
            )
    
    def check_object_manager(self, php_files: List[Path]):
        offenders = [
            self.relative(path) for path in php_files
            if OBJECT_MANAGER_PATTERN.search(self._read(path))
        ]
        if not offenders:
            return
        
        self.recommend(
            "Avoid direct ObjectManager usage",
            Priority.MEDIUM if len(offenders) > OBJECT_MANAGER_LIMIT else Priority.LOW,
            f"{len(offenders)} files call ObjectManager::getInstance() directly.",
            "Direct ObjectManager calls bypass constructor injection and defeat generated proxies. "
            "Inject dependencies through the constructor instead.",
            files=offenders
        )
    
    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            self.logger.debug(f"Skipping unreadable {path}: {e}")
            return ""

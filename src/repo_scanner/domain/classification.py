"""Classification tables — fixed, immutable lookup data shared by both scanners."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Language(str, Enum):
    """Language label attached to a repository summary."""

    TYPESCRIPT = "TypeScript"
    TYPESCRIPT_REACT = "TypeScript/React"
    JAVASCRIPT = "JavaScript"
    JAVASCRIPT_REACT = "JavaScript/React"
    PYTHON = "Python"
    JAVA = "Java"
    GO = "Go"
    RUST = "Rust"
    RUBY = "Ruby"
    PHP = "PHP"
    CSHARP = "C#"
    CPP = "C++"
    C = "C"
    SWIFT = "Swift"
    KOTLIN = "Kotlin"
    VUE = "Vue"
    SVELTE = "Svelte"
    HTML = "HTML"
    CSS = "CSS"
    SCSS = "SCSS"
    JSON = "JSON"
    YAML = "YAML"
    MARKDOWN = "Markdown"
    SQL = "SQL"


class Framework(str, Enum):
    """Framework label derived from manifest dependencies."""

    REACT = "React"
    VUE = "Vue"
    ANGULAR = "Angular"
    SVELTE = "Svelte"
    EXPRESS = "Express"
    FASTAPI = "FastAPI"
    DJANGO = "Django"
    FLASK = "Flask"
    SPRING = "Spring"
    RAILS = "Rails"
    LARAVEL = "Laravel"
    NESTJS = "NestJS"
    TAILWIND = "Tailwind"
    BOOTSTRAP = "Bootstrap"


# Keys are lowercase extensions without the leading dot.
LANGUAGE_EXTENSIONS: Mapping[str, Language] = MappingProxyType(
    {
        "ts": Language.TYPESCRIPT,
        "tsx": Language.TYPESCRIPT_REACT,
        "js": Language.JAVASCRIPT,
        "jsx": Language.JAVASCRIPT_REACT,
        "py": Language.PYTHON,
        "java": Language.JAVA,
        "go": Language.GO,
        "rs": Language.RUST,
        "rb": Language.RUBY,
        "php": Language.PHP,
        "cs": Language.CSHARP,
        "cpp": Language.CPP,
        "c": Language.C,
        "swift": Language.SWIFT,
        "kt": Language.KOTLIN,
        "vue": Language.VUE,
        "svelte": Language.SVELTE,
        "html": Language.HTML,
        "css": Language.CSS,
        "scss": Language.SCSS,
        "json": Language.JSON,
        "yaml": Language.YAML,
        "yml": Language.YAML,
        "md": Language.MARKDOWN,
        "sql": Language.SQL,
    }
)

FRAMEWORK_INDICATORS: Mapping[Framework, tuple[str, ...]] = MappingProxyType(
    {
        Framework.REACT: ("react", "react-dom", "next", "gatsby"),
        Framework.VUE: ("vue", "nuxt", "vuex"),
        Framework.ANGULAR: ("@angular/core",),
        Framework.SVELTE: ("svelte",),
        Framework.EXPRESS: ("express",),
        Framework.FASTAPI: ("fastapi",),
        Framework.DJANGO: ("django",),
        Framework.FLASK: ("flask",),
        Framework.SPRING: ("spring-boot", "org.springframework"),
        Framework.RAILS: ("rails",),
        Framework.LARAVEL: ("laravel",),
        Framework.NESTJS: ("@nestjs/core",),
        Framework.TAILWIND: ("tailwindcss",),
        Framework.BOOTSTRAP: ("bootstrap",),
    }
)

IGNORED_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "__pycache__",
    "venv",
    ".venv",
    "target",
    "vendor",
    ".idea",
    ".vscode",
)

# Matched as path suffixes, not exact basenames.
IGNORED_FILES: tuple[str, ...] = (
    ".DS_Store",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    ".env",
    ".env.local",
)

# Remote scan only: files whose content is worth a network round-trip.
IMPORTANT_FILES: tuple[str, ...] = (
    "package.json",
    "requirements.txt",
    "Cargo.toml",
    "go.mod",
    ".eslintrc",
    "tsconfig.json",
)

IMPORTANT_EXTENSIONS: frozenset[str] = frozenset(
    {"ts", "tsx", "js", "jsx", "py", "go", "rs", "java"}
)

FRAMEWORK_MANIFEST = "package.json"

# topmark:header:start
#
#   project      : LicenseMark
#   file         : builtins.py
#   file_relpath : src/licensemark/languages/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Built-in language table.

Exports:
    LANGUAGES (list[Language]): Comment grammars shipped with LicenseMark, in
        registration order. Configuration may add languages or replace one of
        these by name.

Notes:
    Skip expressions are anchored at the start of the document and matched
    case-insensitively. The line break that follows the matched text is kept
    with it, so patterns only describe the prolog itself (``#!.*``, ``<\?xml.*?\?>``).
"""

from __future__ import annotations

from licensemark.languages.base import Language, make_language

_SHEBANG: str = r"#!.*"
_XML_PROLOG: str = r"<\?xml.*?\?>(\s*<!DOCTYPE[^>]*>)?"
_HTML_DOCTYPE: str = r"<!DOCTYPE[^>]*>"

LANGUAGES: list[Language] = [
    # C-family
    make_language(
        "csharp",
        [".cs"],
        description="C# sources (*.cs)",
        line_comment="//",
        block_start="/*",
        block_end="*/",
        region_start="#region",
        region_end="#endregion",
    ),
    make_language(
        "c",
        [".c", ".h"],
        description="C sources and headers (*.c, *.h)",
        line_comment="//",
        block_start="/*",
        block_end="*/",
    ),
    make_language(
        "cpp",
        [".cc", ".cpp", ".cxx", ".hh", ".hpp", ".hxx", ".inl"],
        description="C++ sources and headers",
        line_comment="//",
        block_start="/*",
        block_end="*/",
    ),
    make_language(
        "java",
        [".java", ".kt", ".kts", ".scala", ".groovy"],
        description="JVM languages (*.java, *.kt, *.kts, *.scala, *.groovy)",
        line_comment="//",
        block_start="/*",
        block_end="*/",
    ),
    make_language(
        "go",
        [".go", ".rs", ".swift"],
        description="Go, Rust and Swift sources",
        line_comment="//",
        block_start="/*",
        block_end="*/",
    ),
    make_language(
        "javascript",
        [".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx"],
        description="JavaScript and TypeScript sources",
        line_comment="//",
        block_start="/*",
        block_end="*/",
        skip_expression=_SHEBANG,
    ),
    make_language(
        "css",
        [".css", ".less", ".scss"],
        description="Style sheets (*.css, *.less, *.scss)",
        block_start="/*",
        block_end="*/",
    ),
    make_language(
        "fsharp",
        [".fs", ".fsi", ".fsx"],
        description="F# sources",
        line_comment="//",
        block_start="(*",
        block_end="*)",
    ),
    # Basic-family
    make_language(
        "vb",
        [".vb"],
        description="Visual Basic sources (*.vb)",
        line_comment="'",
        region_start="#Region",
        region_end="#End Region",
    ),
    # Markup
    make_language(
        "xml",
        [".xml", ".xaml", ".config", ".resx", ".csproj", ".vbproj", ".props", ".targets", ".xsd"],
        description="XML documents",
        block_start="<!--",
        block_end="-->",
        skip_expression=_XML_PROLOG,
    ),
    make_language(
        "html",
        [".html", ".htm", ".cshtml", ".vbhtml"],
        description="HTML documents",
        block_start="<!--",
        block_end="-->",
        skip_expression=_HTML_DOCTYPE,
    ),
    make_language(
        "aspx",
        [".aspx", ".ascx", ".master", ".asax"],
        description="ASP.NET pages and controls",
        block_start="<%--",
        block_end="--%>",
    ),
    # Query
    make_language(
        "sql",
        [".sql"],
        description="SQL scripts (*.sql)",
        line_comment="--",
        block_start="/*",
        block_end="*/",
    ),
    # Scripting
    make_language(
        "python",
        [".py", ".pyi", ".pyw"],
        description="Python sources",
        line_comment="#",
        skip_expression=_SHEBANG,
    ),
    make_language(
        "shell",
        [".sh", ".bash", ".zsh"],
        description="Shell scripts",
        line_comment="#",
        skip_expression=_SHEBANG,
    ),
    make_language(
        "powershell",
        [".ps1", ".psm1", ".psd1"],
        description="PowerShell scripts",
        line_comment="#",
        block_start="<#",
        block_end="#>",
        region_start="#region",
        region_end="#endregion",
    ),
    make_language(
        "ruby",
        [".rb"],
        description="Ruby sources (*.rb)",
        line_comment="#",
        block_start="=begin",
        block_end="=end",
        skip_expression=_SHEBANG,
    ),
    make_language(
        "lua",
        [".lua"],
        description="Lua sources (*.lua)",
        line_comment="--",
        skip_expression=_SHEBANG,
    ),
]

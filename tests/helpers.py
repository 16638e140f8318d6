"""
Builders for test documents and texts shared across test modules.
"""

from pathlib import Path

from signedgen.core.codegen.assembler import TextAssembler
from signedgen.core.codegen.signature import signing_token
from signedgen.core.models import FileKind, GeneratedDocument


def block_text(kind: FileKind, body: str) -> str:
    """Unsigned text with a block doc comment carrying the placeholder."""
    return f"/**\n * {signing_token(kind)}\n */\n{body}"


def partial_body(content: str = "// TODO\n", name: str = "Extra") -> str:
    """A class with one manual region holding ``content``."""
    return (
        "class Foo {\n"
        f"/* BEGIN MANUAL SECTION {name} */\n"
        f"{content}"
        "/* END MANUAL SECTION */\n"
        "}\n"
    )


def demo_document(
    path: Path,
    *,
    extra_method: bool = False,
    manual: bool = True,
    doc: str = "Testing partially generated files",
) -> GeneratedDocument:
    """A small class; each method body is a manual region when ``manual``."""
    out = TextAssembler()
    out.append_line("final class Demo {")
    out.indent()

    methods = ["getName"] + (["extraMethod"] if extra_method else [])
    for name in methods:
        out.append_line(f"public function {name}(): string {{")
        out.indent()
        if manual:
            out.begin_manual_region(name)
            out.append_line("// manual_section_here")
            out.end_manual_region()
        else:
            out.append_line('return "Codegen";')
        out.unindent()
        out.append_line("}")

    out.unindent()
    out.append_line("}")
    return GeneratedDocument(path=path, body=out.finalize(), doc_comment=doc)

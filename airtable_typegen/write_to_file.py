from pathlib import Path

from pydantic import BaseModel

from .helpers import py_string, ts_string


class CodeWriter(BaseModel):
    """Collects the lines of a generated source file."""

    lines: list[str] = []
    indent_width: int = 4

    def line(self, text: str):
        self.lines.append(text)

    def line_empty(self):
        self.lines.append("")

    def line_indented(self, text: str, indent: int = 1):
        self.lines.append(" " * self.indent_width * indent + text)


class WriteToPythonFile(CodeWriter):
    indent_width: int = 4

    def banner(self):
        self.line("# ==========================================")
        self.line("# Auto-generated file. Do not edit directly.")
        self.line("# ==========================================")
        self.line_empty()

    def literal(self, name: str, list: list[str]):
        self.line(f"{name} = Literal[")
        for item in list:
            self.line_indented(f"{py_string(item)},")
        self.line("]")

    def dict_class(self, name: str, pairs: list[tuple[str, str]], first_type: str = "str", second_type: str = "str", value_is_string: bool = True):
        self.line(f"{name}: dict[{first_type}, {second_type}] = {{")
        for k, v in pairs:
            self.dict_row(k, v, value_is_string=value_is_string)
        self.line("}")
        self.line_empty()

    def dict_row(self, key: str, value: str, value_is_string: bool = True):
        if value_is_string:
            self.line_indented(f"{py_string(key)}: {py_string(value)},")
        else:
            self.line_indented(f"{py_string(key)}: {value},")

    def property_row(self, name: str, type: str, default: str = ""):
        if default:
            self.line_indented(f"{name}: {type} = {default}")
        else:
            self.line_indented(f"{name}: {type}")

    def docstring(self, text: str, indent: int = 1):
        self.line_indented(f'"""{text}"""', indent=indent)


class WriteToTypeScriptFile(CodeWriter):
    indent_width: int = 2

    def banner(self):
        self.line("// ==========================================")
        self.line("// Auto-generated file. Do not edit directly.")
        self.line("// ==========================================")
        self.line_empty()

    def docstring(self, text: str, indent: int = 1):
        self.line_indented(f"/** {text} */", indent=indent)

    def dict_class(self, name: str, pairs: list[tuple[str, str]], is_value_string: bool = True):
        self.line(f"export const {name} = {{")
        for k, v in pairs:
            self.dict_row(k, v, is_value_string)
        self.line("} as const")
        self.line_empty()

    def dict_row(self, key: str, value: str, is_value_string: bool = True):
        if is_value_string:
            self.line_indented(f"{ts_string(key)}: {ts_string(value)},")
        else:
            self.line_indented(f"{ts_string(key)}: {value},")

    def property_row(self, name: str, type: str, optional: bool = False, readonly: bool = False):
        prefix = "readonly " if readonly else ""
        self.line_indented(f"{prefix}{ts_string(name)}{'?' if optional else ''}: {type}")


def write_file(path: Path, contents: str):
    """Writes the generated contents to `path`, replacing any previous file and creating missing folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(contents)

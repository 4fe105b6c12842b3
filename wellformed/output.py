"""Writers that turn parser events into output documents.

``CanonicalWriter`` writes a normalised form of the document,
``MarkupWriter`` copies the markup through unchanged, and ``MetaWriter``
describes every parse event together with its location.
"""

from __future__ import annotations

from typing import TextIO

NAMESPACE_SEPARATOR = "\x01"
"""Separator between namespace URI and local name in expanded names."""

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "\t": "&#9;",
        "\n": "&#10;",
        "\r": "&#13;",
    }
)


def escape_character_data(text: str) -> str:
    """Escape character data for output."""
    return text.translate(_ESCAPES)


def escape_attribute_value(value: str) -> str:
    """Escape an attribute value; anything after a namespace separator is dropped."""
    return value.split(NAMESPACE_SEPARATOR, 1)[0].translate(_ESCAPES)


def _pairs(attrs: list[str]) -> list[tuple[str, str]]:
    return list(zip(attrs[0::2], attrs[1::2]))


class CanonicalWriter:
    """Write a canonical form of the document: sorted attributes, explicit end tags."""

    def __init__(
        self, out: TextIO, *, namespaces: bool = False, notations: bool = False
    ) -> None:
        self.out = out
        self.namespaces = namespaces
        self.notations = notations
        self._doctype_name: str | None = None
        self._notation_list: list[tuple[str, str | None, str | None]] = []

    def attach(self, parser) -> None:
        """Install this writer's handlers on ``parser``."""
        parser.ordered_attributes = True
        if self.namespaces:
            parser.StartElementHandler = self._start_element_ns
            parser.EndElementHandler = self._end_element_ns
        else:
            parser.StartElementHandler = self._start_element
            parser.EndElementHandler = self._end_element
        parser.CharacterDataHandler = self._character_data
        parser.ProcessingInstructionHandler = self._processing_instruction
        if self.notations:
            parser.StartDoctypeDeclHandler = self._start_doctype
            parser.EndDoctypeDeclHandler = self._end_doctype
            parser.NotationDeclHandler = self._notation_decl

    def _character_data(self, data: str) -> None:
        self.out.write(escape_character_data(data))

    def _start_element(self, name: str, attrs: list[str]) -> None:
        parts = ["<", name]
        for att_name, value in sorted(_pairs(attrs), key=lambda pair: pair[0]):
            parts.append(f' {att_name}="{escape_attribute_value(value)}"')
        parts.append(">")
        self.out.write("".join(parts))

    def _end_element(self, name: str) -> None:
        self.out.write(f"</{name}>")

    def _start_element_ns(self, name: str, attrs: list[str]) -> None:
        parts = ["<"]
        uri, sep, local = name.rpartition(NAMESPACE_SEPARATOR)
        if sep:
            parts.append(f'n1:{local} xmlns:n1="{escape_attribute_value(name)}"')
            index = 2
        else:
            parts.append(name)
            index = 1
        for att_name, value in sorted(_pairs(attrs), key=lambda pair: pair[0]):
            _, sep, local = att_name.rpartition(NAMESPACE_SEPARATOR)
            parts.append(" ")
            parts.append(f"n{index}:{local}" if sep else att_name)
            parts.append(f'="{escape_attribute_value(value)}"')
            if sep:
                parts.append(f' xmlns:n{index}="{escape_attribute_value(att_name)}"')
                index += 1
        parts.append(">")
        self.out.write("".join(parts))

    def _end_element_ns(self, name: str) -> None:
        _, sep, local = name.rpartition(NAMESPACE_SEPARATOR)
        self.out.write(f"</n1:{local}>" if sep else f"</{name}>")

    def _processing_instruction(self, target: str, data: str) -> None:
        self.out.write(f"<?{target} {data}?>")

    def _start_doctype(self, name, system_id, public_id, has_internal_subset) -> None:
        self._doctype_name = name

    def _notation_decl(self, name, base, system_id, public_id) -> None:
        self._notation_list.append((name, system_id, public_id))

    def _end_doctype(self) -> None:
        notations = sorted(self._notation_list, key=lambda entry: entry[0])
        self._notation_list = []
        name = self._doctype_name
        self._doctype_name = None
        if not notations:
            return
        lines = [f"<!DOCTYPE {name} [\n"]
        for notation, system_id, public_id in notations:
            line = f"<!NOTATION {notation}"
            if public_id is not None:
                line += f" PUBLIC '{public_id}'"
                if system_id is not None:
                    line += f" '{system_id}'"
            elif system_id is not None:
                line += f" SYSTEM '{system_id}'"
            lines.append(line + ">\n")
        lines.append("]>\n")
        self.out.write("".join(lines))


class MarkupWriter:
    """Copy the document's markup to the output exactly as it was read."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def attach(self, parser) -> None:
        """Install this writer's handlers on ``parser``."""
        parser.StartElementHandler = None
        parser.EndElementHandler = None
        parser.CharacterDataHandler = None
        parser.ProcessingInstructionHandler = None
        parser.DefaultHandler = self.out.write


class MetaWriter:
    """Describe each parse event as an element carrying its position.

    ID attributes are recognised from the attribute-list declarations seen
    in the DTD.
    """

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self._parser = None
        self._id_attributes: dict[str, str] = {}

    def attach(self, parser) -> None:
        """Install this writer's handlers on ``parser``."""
        self._parser = parser
        parser.ordered_attributes = True
        parser.StartElementHandler = self._start_element
        parser.EndElementHandler = self._end_element
        parser.ProcessingInstructionHandler = self._processing_instruction
        parser.CommentHandler = self._comment
        parser.StartCdataSectionHandler = self._start_cdata
        parser.EndCdataSectionHandler = self._end_cdata
        parser.CharacterDataHandler = self._character_data
        parser.StartDoctypeDeclHandler = self._start_doctype
        parser.EndDoctypeDeclHandler = self._end_doctype
        parser.EntityDeclHandler = self._entity_decl
        parser.NotationDeclHandler = self._notation_decl
        parser.StartNamespaceDeclHandler = self._start_namespace
        parser.EndNamespaceDeclHandler = self._end_namespace
        parser.AttlistDeclHandler = self._attlist_decl

    def start_document(self) -> None:
        """Write the opening of the description."""
        self.out.write("<document>\n")

    def end_document(self) -> None:
        """Write the closing of the description."""
        self.out.write("</document>\n")

    def _location(self) -> str:
        parser = self._parser
        base = parser.GetBase()
        uri = f' uri="{base}"' if base else ""
        return (
            f'{uri} byte="{parser.CurrentByteIndex}"'
            f' line="{parser.CurrentLineNumber}"'
            f' col="{parser.CurrentColumnNumber}"'
        )

    def _attlist_decl(self, elname, attname, att_type, default, required) -> None:
        if att_type == "ID":
            self._id_attributes.setdefault(elname, attname)

    def _start_element(self, name: str, attrs: list[str]) -> None:
        parts = [f'<starttag name="{name}"', self._location()]
        pairs = _pairs(attrs)
        if pairs:
            parts.append(">\n")
            id_name = self._id_attributes.get(name)
            for att_name, value in pairs:
                parts.append(
                    f'<attribute name="{att_name}" value="'
                    f"{escape_character_data(value)}"
                )
                parts.append('" id="yes"/>\n' if att_name == id_name else '"/>\n')
            parts.append("</starttag>\n")
        else:
            parts.append("/>\n")
        self.out.write("".join(parts))

    def _end_element(self, name: str) -> None:
        self.out.write(f'<endtag name="{name}"{self._location()}/>\n')

    def _processing_instruction(self, target: str, data: str) -> None:
        self.out.write(
            f'<pi target="{target}" data="{escape_character_data(data)}"'
            f"{self._location()}/>\n"
        )

    def _comment(self, data: str) -> None:
        self.out.write(
            f'<comment data="{escape_character_data(data)}"{self._location()}/>\n'
        )

    def _start_cdata(self) -> None:
        self.out.write(f"<startcdata{self._location()}/>\n")

    def _end_cdata(self) -> None:
        self.out.write(f"<endcdata{self._location()}/>\n")

    def _character_data(self, data: str) -> None:
        self.out.write(
            f'<chars str="{escape_character_data(data)}"{self._location()}/>\n'
        )

    def _start_doctype(self, name, system_id, public_id, has_internal_subset) -> None:
        self.out.write(f'<startdoctype name="{name}"{self._location()}/>\n')

    def _end_doctype(self) -> None:
        self.out.write(f"<enddoctype{self._location()}/>\n")

    def _notation_decl(self, name, base, system_id, public_id) -> None:
        parts = [f'<notation name="{name}"']
        if public_id:
            parts.append(f' public="{public_id}"')
        if system_id:
            parts.append(f' system="{escape_character_data(system_id)}"')
        parts.append(self._location())
        parts.append("/>\n")
        self.out.write("".join(parts))

    def _entity_decl(
        self, name, is_parameter, value, base, system_id, public_id, notation
    ) -> None:
        parts = [f'<entity name="{name}"']
        if value is not None:
            parts.append(self._location())
            parts.append(">")
            parts.append(escape_character_data(value))
            parts.append("</entity/>\n")
        else:
            if public_id:
                parts.append(f' public="{public_id}"')
            parts.append(f' system="{escape_character_data(system_id or "")}"')
            if notation:
                parts.append(f' notation="{notation}"')
            parts.append(self._location())
            parts.append("/>\n")
        self.out.write("".join(parts))

    def _start_namespace(self, prefix, uri) -> None:
        parts = ["<startns"]
        if prefix:
            parts.append(f' prefix="{prefix}"')
        if uri:
            parts.append(f' ns="{escape_character_data(uri)}"/>\n')
        else:
            parts.append("/>\n")
        self.out.write("".join(parts))

    def _end_namespace(self, prefix) -> None:
        if not prefix:
            self.out.write("<endns/>\n")
        else:
            self.out.write(f'<endns prefix="{prefix}"/>\n')
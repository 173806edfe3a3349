"""
Policy Document - structured view of a secedit INF snapshot.

secedit exports the local security policy as an INI-like file:

    [Unicode]
    Unicode=yes
    [Privilege Rights]
    SeServiceLogonRight = *S-1-5-80-0,*S-1-5-21-...-1001
    [Version]
    signature="$CHICAGO$"

Rights are edited on the parsed form and written back, so untouched lines
round-trip verbatim and a granted identifier is never listed twice.
"""

from dataclasses import dataclass, field
from typing import List, Optional

PRIVILEGE_RIGHTS_SECTION = "Privilege Rights"


@dataclass
class PolicyEntry:
    """A key/value line (key is None for comments and unparseable lines)."""

    key: Optional[str]
    value: str = ""
    raw: Optional[str] = None

    def render(self) -> str:
        if self.raw is not None:
            return self.raw
        return f"{self.key} = {self.value}"


@dataclass
class PolicySection:
    name: str
    entries: List[PolicyEntry] = field(default_factory=list)

    def find(self, key: str) -> Optional[PolicyEntry]:
        for entry in self.entries:
            if entry.key is not None and entry.key.lower() == key.lower():
                return entry
        return None


def split_identifiers(value: str) -> List[str]:
    """Split a right's value into identifiers, dropping blanks and duplicates."""
    identifiers: List[str] = []
    seen = set()
    for item in value.split(","):
        item = item.strip()
        if item and item.lower() not in seen:
            seen.add(item.lower())
            identifiers.append(item)
    return identifiers


class PolicyDocument:
    """Parsed security policy snapshot."""

    def __init__(self, preamble: Optional[List[str]] = None, sections: Optional[List[PolicySection]] = None):
        self.preamble = preamble or []
        self.sections = sections or []
        self.modified = False

    @classmethod
    def parse(cls, text: str) -> "PolicyDocument":
        preamble: List[str] = []
        sections: List[PolicySection] = []
        current: Optional[PolicySection] = None

        lines = text.lstrip("\ufeff").splitlines()
        i = 0
        while i < len(lines):
            line = lines[i]
            stripped = line.strip()
            i += 1

            if _is_section_header(stripped):
                current = PolicySection(stripped[1:-1].strip())
                sections.append(current)
                continue

            if current is None:
                preamble.append(line)
                continue

            if "=" in stripped and not stripped.startswith(";"):
                key, value = stripped.split("=", 1)
                value = value.strip()
                raw = line
                # A value ending in "," continues on the following line(s)
                while value.endswith(",") and i < len(lines) and _is_continuation(lines[i]):
                    value += lines[i].strip()
                    raw += "\n" + lines[i]
                    i += 1
                current.entries.append(PolicyEntry(key.strip(), value, raw))
            else:
                current.entries.append(PolicyEntry(None, raw=line))

        return cls(preamble, sections)

    def get_section(self, name: str) -> Optional[PolicySection]:
        for section in self.sections:
            if section.name.lower() == name.lower():
                return section
        return None

    def get_right(self, right: str) -> List[str]:
        """Identifiers currently holding the right (empty if unassigned)."""
        section = self.get_section(PRIVILEGE_RIGHTS_SECTION)
        entry = section.find(right) if section else None
        return split_identifiers(entry.value) if entry else []

    def grant_right(self, right: str, identifier: str) -> bool:
        """
        Ensure identifier holds right.

        Returns True if the identifier was added, False if it was already
        present. Duplicate identifiers already in the value are collapsed.
        """
        section = self.get_section(PRIVILEGE_RIGHTS_SECTION)
        if section is None:
            section = PolicySection(PRIVILEGE_RIGHTS_SECTION)
            self.sections.append(section)

        entry = section.find(right)
        if entry is None:
            section.entries.append(PolicyEntry(right, identifier))
            self.modified = True
            return True

        identifiers = split_identifiers(entry.value)
        added = identifier.lower() not in {i.lower() for i in identifiers}
        if added:
            identifiers.append(identifier)

        new_value = ",".join(identifiers)
        if new_value != entry.value:
            entry.value = new_value
            entry.raw = None
            self.modified = True
        return added

    def serialize(self) -> str:
        lines = list(self.preamble)
        for section in self.sections:
            lines.append(f"[{section.name}]")
            for entry in section.entries:
                # Continuation entries keep their original line breaks
                lines.extend(entry.render().split("\n"))
        return "\r\n".join(line.rstrip("\r") for line in lines) + "\r\n"


def _is_section_header(stripped: str) -> bool:
    return stripped.startswith("[") and stripped.endswith("]")


def _is_continuation(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and "=" not in stripped and not _is_section_header(stripped)

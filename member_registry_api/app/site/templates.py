"""
HTML rendering for the member site.

Two templates are loaded from the template directory at start‑up:
``index.html`` (the listing page with the create and edit forms) and
``error.html``.  They are ``string.Template`` files; every value
substituted into them is escaped here, so templates never see raw
user input.
"""

import html
from pathlib import Path
from string import Template
from typing import Dict, Optional
from urllib.parse import quote

from member_registry_api.app.schemas.member import Member

INDEX_TEMPLATE = "index"
ERROR_TEMPLATE = "error"


def _escape(text: str) -> str:
    return html.escape(text, quote=True)


class TemplateRenderer:
    """Loads the site templates once and renders pages from them."""

    def __init__(self, template_dir: str, title: str = "Member Registry") -> None:
        self.template_dir = Path(template_dir)
        self.title = title
        self.templates: Dict[str, Template] = {
            name: self._load(name) for name in (INDEX_TEMPLATE, ERROR_TEMPLATE)
        }

    def _load(self, name: str) -> Template:
        path = self.template_dir / f"{name}.html"
        return Template(path.read_text(encoding="utf-8"))

    def render_index(self, members: Dict[str, Member], selected: Optional[Member] = None) -> str:
        rows = "\n            ".join(
            self._render_row(member)
            for member in sorted(members.values(), key=lambda m: (m.name.lower(), m.id))
        )
        return self.templates[INDEX_TEMPLATE].substitute(
            title=_escape(self.title),
            count=len(members),
            rows=rows,
            edit_form=self._render_edit_form(selected) if selected else "",
        )

    def render_error(self, code: int, message: str) -> str:
        return self.templates[ERROR_TEMPLATE].substitute(code=code, message=_escape(message))

    @staticmethod
    def _render_row(member: Member) -> str:
        member_id = _escape(member.id)
        registered = member.registration_time.isoformat() if member.registration_time else ""
        return (
            f"<tr><td>{_escape(member.name)}</td><td>{member_id}</td>"
            f"<td>{_escape(registered)}</td>"
            f'<td><a href="/?id={_escape(quote(member.id))}">Edit</a> '
            f'<form method="post" action="/delete" style="display:inline">'
            f'<input type="hidden" name="id" value="{member_id}" />'
            f'<button type="submit">Delete</button></form></td></tr>'
        )

    @staticmethod
    def _render_edit_form(member: Member) -> str:
        return (
            "<h2>Edit member</h2>\n"
            '    <form method="post" action="/update">\n'
            f'        <input type="hidden" name="id" value="{_escape(member.id)}" />\n'
            f'        <label>Name <input type="text" name="name" value="{_escape(member.name)}" required /></label>\n'
            '        <button type="submit">Save</button>\n'
            "    </form>"
        )

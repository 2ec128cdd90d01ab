"""A theme directory of your own, rendered in debug mode.

Debug mode keeps stylesheets unminified and labels each one with its
source file, raises on missing components instead of printing a
placeholder, and writes a rotating log.

Run:
    python app.py
"""

import tempfile
from pathlib import Path

from themed import TemplateNotFoundError, Theme, ThemeConfiguration

theme_dir = Path(__file__).parent / "theme"
log_file = Path(tempfile.mkdtemp()) / "themed.log"

theme = Theme(
    ThemeConfiguration(template_path=theme_dir, debug=True, debug_level=3, debug_log=log_file)
)

with theme.session() as session:
    card = theme.make("cards/profile")
    parameters = card.parameters
    html = card.name("Ada Lovelace").role("Analyst").avatar("user").render()
    header = session.drain("header")

try:
    theme.make("cards/missing")
except TemplateNotFoundError as e:
    error = e.format_compact()


def main() -> None:
    print(html)
    print(header)
    for name, description in parameters.items():
        print(f"  {name}: {description}")
    print(error)


if __name__ == "__main__":
    main()

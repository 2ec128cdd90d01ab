"""A full page from the bundled bs5 theme.

Components are rendered first; the page head and foot are filled from the
asset queues afterwards, so every stylesheet and script the components
needed appears exactly once.

Run:
    python app.py
"""

import themed

body = "\n".join(
    [
        themed.make("feedback/alert")
        .title("Welcome")
        .message("Your profile was saved.")
        .variant("success")
        .render(),
        themed.make("buttons/button").text("Edit profile").href("/profile").icon("star").render(),
        themed.make("buttons/button").text("Sign out").variant("secondary").render(),
        themed.make("form/new-password").label("New password").minLength(14).render(),
    ]
)

output = f"""<!doctype html>
<html>
<head>
{themed.header_scripts()}
</head>
<body>
{body}
{themed.footer_scripts()}
</body>
</html>"""


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()

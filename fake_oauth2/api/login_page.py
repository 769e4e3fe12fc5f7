"""The "login" form shown by GET /oauth/authorize when no email is given.

There is no password: whatever email you type becomes the identity in
the issued tokens.  The form submits straight back to /oauth/authorize
as a GET, carrying the original state along in a hidden field.
"""

from __future__ import annotations

import html

_LOGIN_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Log in | fake-cloud.gov</title>
  <link rel="stylesheet" href="/style.css">
</head>
<body>
  <div class="card">
    <img class="logo" src="/fake-cloud.gov.svg" alt="fake-cloud.gov">
    <h1>Log in to fake-cloud.gov</h1>
    <p class="hint">This is a fake OAuth2 server. Enter any email address
      and you will be logged in as that user.</p>
    <form method="get" action="/oauth/authorize">
      <label for="email">Email</label>
      <input id="email" name="email" type="text" required autofocus>
      {state_field}
      <button type="submit">Log in</button>
    </form>
  </div>
</body>
</html>
"""


def render_login_page(state: str | None) -> str:
    state_field = ""
    if state is not None:
        state_field = (
            f'<input type="hidden" name="state" value="{html.escape(state, quote=True)}">'
        )
    return _LOGIN_HTML.format(state_field=state_field)

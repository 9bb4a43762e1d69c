from unittest.mock import MagicMock

VIDEO_PAGE = """
<html>
<head>
  <title>Cat does a backflip | TikTok</title>
  <meta name="description" content="cat backflip #cats">
  <meta property="og:video" content="https://example.com/v.mp4">
  <meta property="og:image" content="https://example.com/t.jpg">
</head>
<body>
  <span data-e2e="browse-username">catlover</span>
  <strong data-e2e="like-count">12.3K</strong>
  <strong data-e2e="comment-count">57</strong>
</body>
</html>
"""


def make_response(text="", json_data=None, status_error=None):
    response = MagicMock()
    response.text = text
    response.json.return_value = json_data
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


def make_session():
    session = MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = False
    session.headers = {}
    return session


def pack_script(text, alphabet="abcdefg", offset=14, base=6):
    """Produce a script in the shape SnapTik's abc2.php returns."""
    delimiter = alphabet[base]
    chunks = []
    for char in text.encode("utf-8").decode("latin-1"):
        number = ord(char) + offset
        digits = ""
        while number:
            number, remainder = divmod(number, base)
            digits = alphabet[remainder] + digits
        chunks.append((digits or alphabet[0]) + delimiter)
    payload = "".join(chunks)
    return (
        'eval(function(h,u,n,t,e,r){r="";return decodeURIComponent(escape(r))}'
        f'("{payload}",23,"{alphabet}",{offset},{base},52))'
    )

# Vercel entrypoint for GET /<url-encoded TikTok URL> (see vercel.json rewrites)
from embedgen.server import EmbedHandler


class handler(EmbedHandler):
    pass

# Vercel entrypoint for GET /api/gen_embed.json?url=<TikTok URL>
from embedgen.server import EmbedHandler


class handler(EmbedHandler):
    pass

"""
fontseca.dev Backend — Routes Package
=======================================

Route Inventory:
    - me.py:           /me.info, /me.set, /me.set{Photo,Resume,Hireable}
    - experience.py:   /me.experience.*
    - projects.py:     /me.projects.*
    - technologies.py: /technologies.*
    - articles.py:     /archive.articles.*
    - drafts.py:       /archive.drafts.*
    - patches.py:      /archive.articles.patches.*
    - tags.py:         /archive.tags.*
    - topics.py:       /archive.topics.*
    - health.py:       /health
    - web.py:          public HTML pages (/, /experience, /work, /archive...)

Routes are thin: read identifiers or bind a transfer record, validate it,
call one service method and pick the status code. Failures are raised as
`Problem` and rendered by the handlers registered in main.py.
"""

# Models package init
"""
fontseca.dev Backend — Domain Records
=======================================

What:  Records returned by the services and serialized as JSON by the routes.
Who:   Produced by the external service layer; never persisted from here.

Record Inventory:
    - archive.py:  Article, ArticlePatch, Topic, Tag
    - me.py:       Me, Experience
    - projects.py: Project, TechnologyTag
"""

# Schemas package init
"""
fontseca.dev Backend — Transfer Records
=========================================

What:  Pydantic models for data crossing the HTTP boundary into the services.
How:   Field names (or aliases) are the wire names used by URL-encoded forms and
       JSON bodies. Every field carries a zero-value default so that a missing
       form key leaves it unset; declarative rules run in StructValidator.

Record Inventory:
    - archive.py:  ArticleCreation, ArticleRevision, ArticleFilter, Publication,
                   ArticleRequest, ArticleEntry, Tag/Topic creation and update
    - me.py:       MeUpdate, ExperienceCreation, ExperienceUpdate
    - projects.py: ProjectCreation, ProjectUpdate, TechnologyTag creation and update
"""

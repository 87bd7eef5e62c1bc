"""
Ethnobotanical reference pipelines.

Each context has a handler composing the record engine and a FastAPI router:
- Acquisition: submission of new references
- Curation: review, correction and approval
- Presentation: public search over approved references
"""

# Routes package init
"""
Forum Comments API: Routes Package
====================================

Route Inventory:
    - comments.py:  GET    /comments          (list all comments)
                    POST   /comments          (create a comment)
                    GET    /comments/{id}     (get one comment, {} on miss)
                    PATCH  /comments/{id}     (replace comment text)
                    DELETE /comments/{id}     (delete, always confirms)
    - health.py:    GET    /health            (store connectivity check)

Routes stay thin: read path/body, call CommentService, return the model.
"""

"""
FakeStack Backend — API Routes
================================

Route Inventory:
    - question.py: POST  /question/addQuestion
                   POST  /question/upvoteQuestion
                   POST  /question/downvoteQuestion
                   GET   /question/getQuestionById/{qid}?username=
                   GET   /question/getQuestion?order=&search=
    - user.py:     POST  /user/signup
                   POST  /user/login
                   PATCH /user/resetPassword
                   GET   /user/getUser/{username}
                   DELETE /user/deleteUser/{username}
    - tag.py:      GET   /tag/getTagsWithQuestionNumber
                   GET   /tag/getTagByName/{name}
    - answer.py:   POST  /answer/addAnswer
    - comment.py:  POST  /comment/addComment
    - health.py:   GET   /health

Routes stay thin: validate the body, call a store, map StoreError to 500.
"""

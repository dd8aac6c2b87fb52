from checklist.client.view import TaskListView


class ChecklistSession:
    """One client's view of the list.

    Fetches once on ``load()`` and afterwards only applies its own events to
    the view. Any API failure propagates before the view is touched.
    """

    def __init__(self, api, view=None):
        self.api = api
        self.view = view if view is not None else TaskListView()

    def load(self):
        self.view.load(self.api.list_tasks())
        return self.view

    def add(self, text):
        text = (text or "").strip()
        if not text:
            raise ValueError("Please enter a task!")
        task = self.api.create_task(text)
        self.view.apply_created(task)
        return task

    def toggle(self, task_id, completed):
        self.api.set_completed(task_id, completed)
        self.view.apply_toggled(task_id, completed)

    def remove(self, task_id):
        self.api.delete_task(task_id)
        self.view.apply_deleted(task_id)

from planner_ai.models import ApiConfig, PlannerResponse, ScheduleItem, Task

def test_task_gets_id():
    a = Task(description="Buy milk")
    b = Task(description="Buy milk")
    assert a.id and b.id and a.id != b.id

def test_task_description_trimmed():
    assert Task(id="1", description="  Call mom ").description == "Call mom"

def test_schedule_item_wire_names():
    item = ScheduleItem(time="9:00 AM", taskDescription="Run")
    assert item.task_description == "Run"
    resp = PlannerResponse(schedule=[item], explanation="x")
    assert resp.to_wire() == {
        "schedule": [{"time": "9:00 AM", "taskDescription": "Run"}],
        "explanation": "x",
    }

def test_config_public_view_redacts_key():
    view = ApiConfig(api_key="sk-secret").public_view()
    assert view == {"openaiApiKey": "configured", "apiProvider": "openai", "useMockResponses": False}
    assert ApiConfig().public_view()["openaiApiKey"] == ""

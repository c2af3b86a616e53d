from projects import (start_project, boost_project, tick_projects, effective_cost,
                      is_startable, notify_startable_projects)


def test_start_project_charges_treasury(save, config):
    save.treasury = 500
    cost = effective_cost(config.project("P1_ROADS"), save, config)
    result = start_project(save, config, "P1_ROADS")
    assert result == {"ok": True, "project_id": "P1_ROADS", "cost": cost}
    assert save.treasury == 500 - cost
    assert save.projects["P1_ROADS"].status == "in_progress"


def test_start_project_error_order(save, config):
    save.treasury = 0
    assert start_project(save, config, "NOPE")["status"] == 404
    assert start_project(save, config, "P3_TECH_PARK")["error"] == "Project not available"
    assert start_project(save, config, "P1_ROADS")["error"] == "Insufficient treasury"


def test_project_cannot_start_twice(save, config):
    save.treasury = 1000
    assert start_project(save, config, "P1_ROADS")["ok"]
    assert start_project(save, config, "P1_ROADS")["error"] == "Project not available"


def test_project_completes_after_duration(save, config):
    save.treasury = 1000
    start_project(save, config, "P1_MARKET_REFORM")
    project = config.project("P1_MARKET_REFORM")
    gdp_before = save.gdp
    for _ in range(project.duration_ticks + 2):
        log = tick_projects(save, config)
        if "P1_MARKET_REFORM" in log["completed"]:
            break
    assert save.projects["P1_MARKET_REFORM"].status == "completed"
    assert save.gdp > gdp_before


def test_boost_needs_tokens_and_running_project(save, config):
    save.treasury = 1000
    save.premium_tokens = 0
    start_project(save, config, "P1_ROADS")
    assert boost_project(save, config, "P1_ROADS")["error"] == "Insufficient tokens"

    save.premium_tokens = 1
    assert boost_project(save, config, "P1_SCHOOLS")["error"] == "Project not in progress"
    result = boost_project(save, config, "P1_ROADS")
    assert result["ok"]
    assert save.projects["P1_ROADS"].status == "completed"
    assert save.premium_tokens == 0


def test_ready_notice_sent_once(save, config):
    save.treasury = 10000
    save.notified_startable_project_ids = []
    first = notify_startable_projects(save, config)
    assert "P1_ROADS" in first
    assert notify_startable_projects(save, config) == []
    assert is_startable(config.project("P1_ROADS"), save, config)

import math

from studysync.scheduling import CapacityAwareScheduler, RoundRobinScheduler, TopicType, WorkItem, build_week_grid, weight_steps


def step_items(steps):
    return [WorkItem.from_step(index, step.text, step.duration) for index, step in enumerate(steps)]


def test_places_every_unit():
    steps = weight_steps(TopicType.LAB, 6)
    blocks = RoundRobinScheduler().schedule(step_items(steps))
    assert len(blocks) == sum(math.ceil(step.duration * 2) for step in steps)


def test_cursor_carries_across_items():
    items = [
        WorkItem(id=0, label="first", required_units=3),
        WorkItem(id=1, label="second", required_units=2),
    ]
    blocks = RoundRobinScheduler().schedule(items)
    assert [(b.day, b.start, b.label) for b in blocks] == [
        ("Monday", "09:00", "first"),
        ("Monday", "09:30", "first"),
        ("Monday", "10:00", "first"),
        ("Monday", "10:30", "second"),
        ("Monday", "11:00", "second"),
    ]


def test_spills_over_to_next_day():
    items = [WorkItem(id=0, label="long", required_units=30)]
    blocks = RoundRobinScheduler().schedule(items)
    assert len(blocks) == 30
    assert blocks[23].day == "Monday" and blocks[23].start == "20:30"
    assert blocks[24].day == "Tuesday" and blocks[24].start == "09:00"
    assert blocks[-1].day == "Tuesday"


def test_wraps_after_sunday():
    grid = build_week_grid()
    items = [WorkItem(id=0, label="huge", required_units=grid.capacity() + 2)]
    blocks = RoundRobinScheduler().schedule(items, grid)
    assert blocks[grid.capacity() - 1].day == "Sunday"
    assert blocks[grid.capacity() - 1].start == "18:30"
    assert (blocks[-2].day, blocks[-2].start) == ("Monday", "09:00")
    assert (blocks[-1].day, blocks[-1].start) == ("Monday", "09:30")


def test_ignores_and_leaves_occupancy_alone():
    grid = build_week_grid()
    CapacityAwareScheduler().schedule([WorkItem(id="busy", label="busy", required_units=4)], grid)
    free_before = grid.free_capacity()

    blocks = RoundRobinScheduler().schedule([WorkItem(id=0, label="step", required_units=2)], grid)
    assert [(b.day, b.start) for b in blocks] == [("Monday", "09:00"), ("Monday", "09:30")]
    assert grid.free_capacity() == free_before


def test_new_run_restarts_at_monday_morning():
    scheduler = RoundRobinScheduler()
    scheduler.schedule([WorkItem(id=0, label="a", required_units=5)])
    blocks = scheduler.schedule([WorkItem(id=0, label="b", required_units=1)])
    assert (blocks[0].day, blocks[0].start) == ("Monday", "09:00")


def test_place_has_no_hidden_state():
    scheduler = RoundRobinScheduler()
    grid = build_week_grid()
    first = scheduler.place(WorkItem(id=0, label="a", required_units=3), grid)
    second = scheduler.place(WorkItem(id=1, label="b", required_units=1), grid)
    assert (first[0].day, first[0].start) == ("Monday", "09:00")
    assert (second[0].day, second[0].start) == ("Monday", "09:00")


def test_shared_instance_gives_identical_concurrent_runs():
    from concurrent.futures import ThreadPoolExecutor

    scheduler = RoundRobinScheduler()
    items = [WorkItem(id=i, label=str(i), required_units=40) for i in range(5)]

    def run(_):
        return [(b.day, b.start, b.label) for b in scheduler.schedule(items)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(run, range(8)))
    assert all(result == results[0] for result in results)

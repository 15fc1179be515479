"""Tests for the application lifecycle and Clock."""

import pytest

from myinject import Application, Clock, Inject, LifecycleError

from sample_app import Window


class CountingApp(Application):
    def __init__(self, updates=3, **kwargs):
        super().__init__(name="counting", **kwargs)
        self.updates = updates
        self.calls = []

    def on_start(self):
        self.calls.append('start')

    def on_update(self):
        self.calls.append('update')
        if self.calls.count('update') >= self.updates:
            self.quit()

    def on_exit(self):
        self.calls.append('exit')


class FailingApp(CountingApp):
    def on_update(self):
        raise RuntimeError("update failed")


class Hud:
    app: Application = Inject()
    window: Window = Inject()


class FakeTime:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestApplication:
    """Tests for Application."""

    def test_run_lifecycle(self):
        app = CountingApp()

        app.run()

        assert app.calls == ['start', 'update', 'update', 'update', 'exit']
        assert not app.is_running

    def test_start_binds_application(self):
        app = CountingApp()
        app.start()

        assert app.injector.get(Application) is app
        assert app.injector.get(CountingApp) is app

        hud = app.injector.create(Hud)
        assert hud.app is app
        assert isinstance(hud.window, Window)

    def test_run_while_running(self):
        app = CountingApp()
        app.is_running = True

        with pytest.raises(LifecycleError) as exc_info:
            app.run()

        assert exc_info.value.phase == "run"

    def test_exit_runs_after_update_failure(self):
        app = FailingApp()
        shutdown = []
        app.add_shutdown_hook(lambda: shutdown.append('done'))

        with pytest.raises(RuntimeError, match="update failed"):
            app.run()

        assert app.calls == ['start', 'exit']
        assert shutdown == ['done']
        assert not app.is_running

    def test_hooks_order(self):
        app = CountingApp(updates=1)
        app.add_startup_hook(lambda: app.calls.append('startup-hook'))
        app.add_shutdown_hook(lambda: app.calls.append('shutdown-hook'))

        app.run()

        assert app.calls == ['startup-hook', 'start', 'update', 'exit', 'shutdown-hook']

    def test_startup_hook_failure(self):
        app = CountingApp()

        def broken():
            raise ValueError("no display")

        app.add_startup_hook(broken)

        with pytest.raises(LifecycleError, match="no display") as exc_info:
            app.run()

        assert exc_info.value.phase == "start"
        assert 'start' not in app.calls

    def test_shutdown_hook_failure_is_logged(self):
        app = CountingApp(updates=1)

        def broken():
            raise ValueError("cleanup failed")

        app.add_shutdown_hook(broken)
        app.run()

        assert app.calls[-1] == 'exit'

    def test_name_defaults_to_config(self):
        class Unnamed(CountingApp):
            def __init__(self):
                Application.__init__(self)
                self.calls = []

        assert Unnamed().name == "MyInject App"


class TestClock:
    """Tests for Clock."""

    def test_not_running(self):
        clock = Clock(FakeTime())

        assert clock.elapsed == 0.0
        assert clock.delta_time == 0.0

    def test_tick_and_elapsed(self):
        now = FakeTime(10.0)
        clock = Clock(now)
        clock.start()

        now.now = 10.5
        assert clock.tick() == pytest.approx(0.5)
        now.now = 11.25
        assert clock.tick() == pytest.approx(0.75)
        assert clock.elapsed == pytest.approx(1.25)

    def test_pause_excludes_paused_time(self):
        now = FakeTime(0.0)
        clock = Clock(now)
        clock.start()

        now.now = 1.0
        clock.pause()
        now.now = 5.0
        assert clock.elapsed == pytest.approx(1.0)
        assert clock.tick() == 0.0

        clock.resume()
        now.now = 6.0
        assert clock.elapsed == pytest.approx(2.0)
        assert clock.tick() == pytest.approx(1.0)

    def test_reset(self):
        now = FakeTime(0.0)
        clock = Clock(now)
        clock.start()
        now.now = 3.0
        clock.reset()

        assert clock.elapsed == 0.0
        assert "running=True" in repr(clock)

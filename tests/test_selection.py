from app.selection import SelectionController

from factories import make_movie


def test_select_opens_and_close_clears() -> None:
    controller = SelectionController()
    movie = make_movie(1, "Dune")

    assert controller.is_open is False
    controller.select(movie)
    assert controller.is_open is True
    assert controller.selected == movie
    assert controller.is_selected(1)

    controller.close()
    assert controller.is_open is False
    assert controller.selected is None
    assert controller.state().movie is None


def test_select_replaces_current_selection() -> None:
    controller = SelectionController()
    controller.select(make_movie(1, "Dune"))
    controller.select(make_movie(2, "Her"))

    assert controller.is_selected(2)
    assert not controller.is_selected(1)
    state = controller.state()
    assert state.is_open is True
    assert state.movie is not None and state.movie.id == 2

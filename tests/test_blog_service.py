from portfolio.services import blog_service


def test_slugify():
    assert blog_service.slugify("Hola, Señor Café!") == "hola-senor-cafe"
    assert blog_service.slugify("   ") == "post"
    assert len(blog_service.slugify("a" * 500)) == 200


def test_can_transition():
    assert blog_service.can_transition("draft", "published")
    assert blog_service.can_transition("published", "archived")
    assert blog_service.can_transition("archived", "draft")
    assert not blog_service.can_transition("archived", "published")
    assert blog_service.can_transition("draft", "draft")


def test_same_state_transition_is_noop(storage):
    post = storage.create("blog_posts", {"title": "T", "slug": "t"})
    assert blog_service.transition_post(storage, post, "draft") is post


def test_confirmation_url_uses_site_url():
    url = blog_service.confirmation_url("abc")
    assert url.endswith("/api/blog/subscriptions/confirm?token=abc")


def test_subscribe_pending_keeps_single_row(storage):
    first = blog_service.subscribe(storage, "A@Example.com")
    second = blog_service.subscribe(storage, "a@example.com", "Ann")
    assert first.id == second.id
    assert second.status == "pending"
    assert second.name == "Ann"
    # cada reenvío genera un token nuevo
    assert second.confirmation_token != first.confirmation_token

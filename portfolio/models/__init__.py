from .auth import User  # noqa
from .content import (  # noqa
    Section, Project, Experience, Certification, Testimonial, ContactSubmission
)
from .blog import BlogCategory, BlogPost, BlogSubscription, CaseStudyDetail  # noqa

"""Remediation guidance for common Lighthouse audits.

Maps audit ids found in detail reports to practical tips, a short code
example and further reading. Unknown audits get a generic recommendation
pointing at the audit's documentation.
"""

from dataclasses import dataclass, field

from auditor.reports.contract import Metric


@dataclass(frozen=True)
class CodeExample:
    """Before/after snippet illustrating a fix."""

    language: str
    after: str
    description: str
    before: str | None = None

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "before": self.before,
            "after": self.after,
            "description": self.description,
        }


@dataclass(frozen=True)
class Recommendation:
    """Guidance for resolving one audit."""

    title: str
    tips: list[str]
    estimated_impact: str
    resources: list[tuple[str, str]] = field(default_factory=list)  # (label, url)
    code_example: CodeExample | None = None
    metric: Metric | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "tips": list(self.tips),
            "codeExample": self.code_example.to_dict() if self.code_example else None,
            "estimatedImpact": self.estimated_impact,
            "resources": [{"label": label, "url": url} for label, url in self.resources],
            "metric": self.metric.value if self.metric else None,
        }


RECOMMENDATIONS: dict[str, Recommendation] = {
    # Performance
    "render-blocking-resources": Recommendation(
        title="Eliminate render-blocking resources",
        tips=[
            "Load scripts with the async or defer attribute",
            "Inline critical CSS and defer the rest",
            "Drop unused CSS and JavaScript",
            "Use preload and preconnect resource hints",
        ],
        code_example=CodeExample(
            language="html",
            before='<script src="app.js"></script>',
            after='<script src="app.js" defer></script>',
            description="Let HTML parsing continue while the script downloads",
        ),
        estimated_impact="Often saves 0.5-2 seconds of load time",
        resources=[
            ("Eliminate render-blocking resources", "https://web.dev/render-blocking-resources/"),
            (
                "MDN: async and defer",
                "https://developer.mozilla.org/en-US/docs/Web/HTML/Element/script#attr-defer",
            ),
        ],
        metric=Metric.PERFORMANCE,
    ),
    "unused-css-rules": Recommendation(
        title="Remove unused CSS",
        tips=[
            "Strip unused selectors at build time (for example with PurgeCSS)",
            "Split stylesheets per page or component",
            "Load only above-the-fold CSS up front",
        ],
        code_example=CodeExample(
            language="javascript",
            after="module.exports = {\n  content: ['./src/**/*.{html,js}'],\n  css: ['./src/**/*.css'],\n}",
            description="PurgeCSS configuration scanning templates for used selectors",
        ),
        estimated_impact="CSS payload commonly shrinks by 30-90%",
        resources=[
            ("Remove unused CSS", "https://web.dev/unused-css-rules/"),
            ("PurgeCSS", "https://purgecss.com/"),
        ],
        metric=Metric.PERFORMANCE,
    ),
    "unminified-css": Recommendation(
        title="Minify CSS",
        tips=[
            "Minify stylesheets automatically in production builds",
            "Remove comments and whitespace",
            "Use a minifier such as cssnano",
        ],
        estimated_impact="Typically 20-40% smaller CSS files",
        resources=[
            ("Minify CSS", "https://web.dev/unminified-css/"),
            ("cssnano", "https://cssnano.co/"),
        ],
        metric=Metric.PERFORMANCE,
    ),
    "uses-optimized-images": Recommendation(
        title="Serve images in modern formats",
        tips=[
            "Prefer WebP or AVIF over JPEG and PNG",
            "Provide responsive sizes with srcset",
            "Lazy-load images below the fold",
        ],
        code_example=CodeExample(
            language="html",
            before='<img src="photo.jpg" alt="Photo">',
            after=(
                '<picture>\n  <source srcset="photo.webp" type="image/webp">\n'
                '  <img src="photo.jpg" alt="Photo" loading="lazy">\n</picture>'
            ),
            description="Offer WebP with a JPEG fallback",
        ),
        estimated_impact="Images are often 25-35% smaller than JPEG",
        resources=[
            ("Use modern image formats", "https://web.dev/uses-webp-images/"),
        ],
        metric=Metric.PERFORMANCE,
    ),
    # Accessibility
    "color-contrast": Recommendation(
        title="Ensure sufficient color contrast",
        tips=[
            "Keep at least 4.5:1 contrast for body text",
            "Large text needs at least 3:1",
            "Never rely on color alone to convey meaning",
        ],
        code_example=CodeExample(
            language="css",
            before="color: #999; /* on white */",
            after="color: #767676; /* WCAG AA on white */",
            description="Darken grey text until it meets the AA ratio",
        ),
        estimated_impact="Critical for users with low vision",
        resources=[
            ("Color contrast", "https://web.dev/color-contrast/"),
            (
                "WCAG contrast minimum",
                "https://www.w3.org/WAI/WCAG21/Understanding/contrast-minimum.html",
            ),
        ],
        metric=Metric.ACCESSIBILITY,
    ),
    "image-alt": Recommendation(
        title="Add alt text to images",
        tips=[
            "Describe informative images in their alt attribute",
            'Use alt="" for purely decorative images',
            'Skip phrases like "image of"',
        ],
        code_example=CodeExample(
            language="html",
            before='<img src="chart.png">',
            after='<img src="chart.png" alt="Applications processed per month, 2024">',
            description="State what the image conveys",
        ),
        estimated_impact="Required for screen reader users, also helps SEO",
        resources=[
            ("Image alt text", "https://web.dev/image-alt/"),
            ("W3C alt decision tree", "https://www.w3.org/WAI/tutorials/images/decision-tree/"),
        ],
        metric=Metric.ACCESSIBILITY,
    ),
    "aria-required-attr": Recommendation(
        title="Give ARIA roles their required attributes",
        tips=[
            "Set explicit values on every ARIA attribute",
            "Prefer semantic HTML elements over ARIA",
            "Verify with a screen reader",
        ],
        code_example=CodeExample(
            language="html",
            before="<button aria-expanded>Menu</button>",
            after='<button aria-expanded="false" aria-controls="menu-items">Menu</button>',
            description="ARIA state attributes need explicit values",
        ),
        estimated_impact="Critical for assistive technology users",
        resources=[
            ("ARIA required attributes", "https://web.dev/aria-required-attr/"),
            ("ARIA Authoring Practices", "https://www.w3.org/WAI/ARIA/apg/"),
        ],
        metric=Metric.ACCESSIBILITY,
    ),
    # SEO
    "meta-description": Recommendation(
        title="Add a meta description",
        tips=[
            "Write a unique 150-160 character description per page",
            "Summarize the page content accurately",
        ],
        code_example=CodeExample(
            language="html",
            after='<meta name="description" content="Apply for and renew permits online.">',
            description="Place the description in the document head",
        ),
        estimated_impact="Better click-through from search results",
        resources=[
            ("Meta descriptions", "https://web.dev/meta-description/"),
            (
                "Google: snippets",
                "https://developers.google.com/search/docs/appearance/snippet",
            ),
        ],
        metric=Metric.SEO,
    ),
    "document-title": Recommendation(
        title="Give every page a title element",
        tips=[
            "Use a unique, descriptive title per page",
            "Keep it under 60 characters",
            "Put the distinguishing words first",
        ],
        estimated_impact="Essential for search results and browser tabs",
        resources=[
            ("Document title", "https://web.dev/document-title/"),
            ("MDN: title", "https://developer.mozilla.org/en-US/docs/Web/HTML/Element/title"),
        ],
        metric=Metric.SEO,
    ),
    "link-text": Recommendation(
        title="Use descriptive link text",
        tips=[
            'Avoid "click here" and "read more"',
            "Link text should make sense out of context",
        ],
        code_example=CodeExample(
            language="html",
            before='<a href="/report">Click here</a> for the report',
            after='<a href="/report">Read the annual accessibility report</a>',
            description="Say where the link goes",
        ),
        estimated_impact="Helps both search engines and screen reader users",
        resources=[
            ("Link text", "https://web.dev/link-text/"),
            ("WebAIM: links", "https://webaim.org/techniques/hypertext/"),
        ],
        metric=Metric.SEO,
    ),
    # Best practices
    "uses-https": Recommendation(
        title="Serve the site over HTTPS",
        tips=[
            "Install a TLS certificate",
            "Redirect all HTTP traffic to HTTPS",
            "Send an HSTS header",
            "Load every subresource over HTTPS",
        ],
        code_example=CodeExample(
            language="nginx",
            after=(
                "server {\n    listen 80;\n    server_name example.gov;\n"
                "    return 301 https://$server_name$request_uri;\n}"
            ),
            description="Permanently redirect plain HTTP",
        ),
        estimated_impact="Baseline for security and a search ranking signal",
        resources=[
            ("Does not use HTTPS", "https://web.dev/is-on-https/"),
            ("Let's Encrypt", "https://letsencrypt.org/"),
        ],
        metric=Metric.BEST_PRACTICES,
    ),
    "csp-xss": Recommendation(
        title="Add a Content Security Policy",
        tips=[
            "Start from a strict policy and relax it deliberately",
            "Use nonces or hashes for inline scripts",
            "Collect violation reports",
        ],
        code_example=CodeExample(
            language="http",
            after="Content-Security-Policy: default-src 'self'; script-src 'self' 'nonce-{random}'",
            description="Send the policy as a response header",
        ),
        estimated_impact="Sharply reduces the XSS attack surface",
        resources=[
            ("Content Security Policy", "https://web.dev/csp/"),
            ("MDN: CSP", "https://developer.mozilla.org/en-US/docs/Web/HTTP/CSP"),
        ],
        metric=Metric.BEST_PRACTICES,
    ),
}


def get_recommendation(audit_id: str) -> Recommendation:
    """Get the recommendation for an audit id, or a generic one."""
    recommendation = RECOMMENDATIONS.get(audit_id)
    if recommendation is not None:
        return recommendation

    return Recommendation(
        title="General recommendation",
        tips=[
            "Read the Lighthouse documentation for this audit",
            "Reproduce the finding in browser DevTools",
            "Re-test after each change",
        ],
        estimated_impact="Varies by issue",
        resources=[
            ("Lighthouse documentation", f"https://web.dev/lighthouse-{audit_id}/"),
            ("web.dev", "https://web.dev/"),
        ],
    )

from __future__ import annotations

from pagescribe.models import AssertionTemplate, AssertionType, PageType

_Row = tuple[AssertionType, str, str]

_ASSERTIONS: dict[PageType, tuple[_Row, ...]] = {
    "login-form": (
        (
            "visibility",
            "Verify login form fields are visible",
            "cy.get('input[type=\"password\"]').should('be.visible');\n"
            "cy.get('input[type=\"email\"], input[type=\"text\"]').first().should('be.visible');",
        ),
        (
            "form-validation",
            "Test empty submission shows error",
            "cy.get('form').submit();\n"
            "cy.get('[class*=\"error\"], [role=\"alert\"]').should('be.visible');",
        ),
        (
            "form-validation",
            "Test invalid email validation",
            "cy.get('input[type=\"email\"]').type('invalid-email');\n"
            "cy.get('form').submit();\n"
            "cy.get('[class*=\"error\"], [role=\"alert\"]').should('be.visible');",
        ),
    ),
    "registration-form": (
        (
            "visibility",
            "Verify registration form fields are visible",
            "cy.get('input[type=\"password\"]').should('have.length.at.least', 2);\n"
            "cy.get('input[type=\"email\"]').should('be.visible');",
        ),
        (
            "form-validation",
            "Test password match validation",
            "cy.get('input[type=\"password\"]').first().type('password123');\n"
            "cy.get('input[type=\"password\"]').last().type('different456');\n"
            "cy.get('form').submit();\n"
            "cy.get('[class*=\"error\"], [role=\"alert\"]').should('contain.text', 'match');",
        ),
        (
            "form-validation",
            "Test required field validation",
            "cy.get('form').submit();\n"
            "cy.get(':invalid, [class*=\"error\"]').should('exist');",
        ),
    ),
    "contact-form": (
        (
            "visibility",
            "Verify contact form fields are visible",
            "cy.get('input[type=\"email\"]').should('be.visible');\n"
            "cy.get('textarea').should('be.visible');",
        ),
        (
            "form-validation",
            "Test required fields validation",
            "cy.get('form').submit();\n"
            "cy.get(':invalid, [class*=\"error\"]').should('exist');",
        ),
    ),
    "search": (
        (
            "visibility",
            "Verify search input is functional",
            "cy.get('input[type=\"search\"], [role=\"searchbox\"]').should('be.visible').type('test query{enter}');",
        ),
        (
            "visibility",
            "Verify results appear after search",
            "cy.get('[class*=\"result\"], [role=\"list\"]').should('be.visible');",
        ),
        (
            "count",
            "Verify result count",
            "cy.get('[class*=\"result\"] > *, [role=\"listitem\"]').should('have.length.at.least', 1);",
        ),
    ),
    "table": (
        (
            "visibility",
            "Verify table structure",
            "cy.get('table').should('be.visible');\n"
            "cy.get('thead th, th').should('have.length.at.least', 1);",
        ),
        (
            "count",
            "Verify table has data rows",
            "cy.get('tbody tr, table tr').should('have.length.at.least', 1);",
        ),
        (
            "visibility",
            "Verify pagination or sorting (if present)",
            "cy.get('[class*=\"pagination\"], [class*=\"sort\"], button:contains(\"Next\")').should('exist');",
        ),
    ),
    "list": (
        (
            "visibility",
            "Verify list container is visible",
            "cy.get('[class*=\"grid\"], [class*=\"list\"], [role=\"list\"]').should('be.visible');",
        ),
        (
            "count",
            "Verify list has items",
            "cy.get('[class*=\"card\"], [class*=\"item\"], [role=\"listitem\"]').should('have.length.at.least', 1);",
        ),
    ),
    "detail": (
        (
            "visibility",
            "Verify page heading exists",
            "cy.get('h1').should('be.visible').and('not.be.empty');",
        ),
        (
            "visibility",
            "Verify main content is loaded",
            "cy.get('main, [role=\"main\"], article').should('be.visible');",
        ),
        (
            "attribute",
            "Verify images have alt text",
            "cy.get('img').each(($img) => {\n  cy.wrap($img).should('have.attr', 'alt');\n});",
        ),
    ),
    "generic": (
        (
            "visibility",
            "Verify page loaded",
            "cy.get('body').should('be.visible');",
        ),
    ),
}

# 无论页面类型，始终追加无障碍审计
ACCESSIBILITY_AUDIT: _Row = (
    "accessibility",
    "Run accessibility audit",
    "cy.checkA11y(null, { includedImpacts: ['critical', 'serious'] });",
)


def suggest_assertions(page_type: PageType) -> list[AssertionTemplate]:
    rows = _ASSERTIONS.get(page_type, _ASSERTIONS["generic"]) + (ACCESSIBILITY_AUDIT,)
    return [AssertionTemplate(type=t, description=desc, code=code) for t, desc, code in rows]

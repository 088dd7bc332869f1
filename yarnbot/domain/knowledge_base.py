# yarnbot/domain/knowledge_base.py
# Static knowledge: topics, canned answers and the small lookup tables around them.
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from yarnbot.domain.errors import UnknownTopicError
from yarnbot.domain.models import (
    DynamicTemplate,
    IntentTag,
    KnowledgeEntry,
    StaticTemplate,
    TemplateContext,
)

COMPANY_EMAIL = "kspyarnskarur@gmail.com"
COMPANY_PHONE = "+91 9994955782"
COMPANY_ADDRESS = "4-130 Gandhi Nagar, Karur Sukkaliyur, Tamil Nadu, India"
BUSINESS_HOURS = "Monday to Saturday from 9 AM to 6 PM IST"


def time_of_day(ctx: TemplateContext) -> str:
    hour = ctx.now.hour
    if hour < 12:
        return "Good morning"
    if hour < 18:
        return "Good afternoon"
    return "Good evening"


def _greeting(ctx: TemplateContext) -> str:
    salutation = time_of_day(ctx)
    if ctx.conversation.user_name:
        return (
            f"{salutation}, {ctx.conversation.user_name}! Welcome back to KSP Yarns. "
            "How can I assist you today?"
        )
    if ctx.conversation.message_count > 5:
        return f"{salutation}! Great to see you again. What can I help you with today?"
    return (
        f"{salutation}! Welcome to KSP Yarns. "
        "How can I assist you today with our yarn products or services?"
    )


def _small_talk(ctx: TemplateContext) -> str:
    if "general" in ctx.conversation.recent_topics:
        return (
            "I'm doing well, thanks for asking! I'm an assistant here to help you with "
            "information about KSP Yarns' products and services. Is there something "
            "specific you'd like to know about our yarns?"
        )
    return (
        "I'm KSP's virtual assistant, designed to provide information about our yarns, "
        "services, and answer any questions you might have. I'm ready to assist you!"
    )


ENTRIES: tuple[KnowledgeEntry, ...] = (
    KnowledgeEntry(
        topic="products",
        keywords=(
            "yarn", "product", "collection", "buy", "purchase", "material", "catalog", "type",
            "variety", "stock", "available", "offer", "sell", "provide", "manufacture",
        ),
        text=(
            "We offer a comprehensive range of high-quality yarns including recycled, OE "
            "(Open-End), ring spun, and vortex yarns. Our product categories include: 1) Cotton "
            "yarns from Ne 4 to Ne 80 with variants like organic cotton, recycled cotton, combed "
            "cotton, and carded cotton. 2) Polyester yarns from Ne 10 to Ne 60 including virgin "
            "polyester, recycled polyester (GRS certified), and textured polyester. 3) Blended "
            "yarns from Ne 6 to Ne 50 such as poly-cotton blends (65/35, 50/50, 60/40 ratios), "
            "cotton-viscose blends, and specialty blends. 4) Specialty yarns including melange "
            "yarns, slub yarns, fancy yarns, and core-spun yarns. Our production technologies "
            "include Ring Spinning for premium quality, Open-End Spinning for cost-effectiveness, "
            "and Vortex Spinning for low hairiness and superior performance."
        ),
        template=StaticTemplate(
            "We offer a comprehensive range of high-quality yarns including:\n\n"
            "• Cotton Yarns (Ne 4-80): Organic, recycled, combed, and carded variants\n"
            "• Polyester Yarns (Ne 10-60): Virgin, recycled (GRS certified), and textured\n"
            "• Blended Yarns (Ne 6-50): Poly-cotton, cotton-viscose, and specialty blends\n"
            "• Specialty Yarns: Melange, slub, fancy, and core-spun varieties\n\n"
            "We use advanced spinning technologies including Ring Spinning, Open-End Spinning, "
            "and Vortex Spinning to ensure superior quality. All our products are certified and "
            "meet international standards."
        ),
        follow_up_questions=(
            "What are your bestselling yarns?",
            "Tell me about your cotton yarns",
            "What certifications do your products have?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="price",
        keywords=(
            "price", "cost", "how much", "pricing", "discount", "affordable", "expensive",
            "budget", "quote", "offer", "deal",
        ),
        template=StaticTemplate(
            "Our pricing varies based on yarn type, quantity, and specifications. For detailed "
            "pricing, please visit our Products page or contact our sales team. We offer "
            "competitive rates for bulk orders and regular customers may qualify for special "
            "discounts."
        ),
        follow_up_questions=(
            "Do you offer bulk discounts?",
            "What's your minimum order quantity?",
            "How can I get a price quote?",
        ),
    ),
    KnowledgeEntry(
        topic="shipping",
        keywords=(
            "ship", "delivery", "receive", "shipping", "time", "when", "arrive", "transit",
            "courier", "track", "package", "send",
        ),
        template=StaticTemplate(
            "We offer standard shipping (3-5 business days) and express shipping (1-2 business "
            "days). International shipping is also available for most locations. Once your order "
            "is processed, you'll receive a tracking number to monitor your shipment in real-time."
        ),
        follow_up_questions=(
            "Do you ship internationally?",
            "How can I track my order?",
            "What are your shipping rates?",
        ),
    ),
    KnowledgeEntry(
        topic="return",
        keywords=(
            "return", "refund", "cancel", "exchange", "money back", "policy", "damaged", "wrong",
            "unsatisfied", "quality issue",
        ),
        template=StaticTemplate(
            "We offer a 30-day return policy for unopened products. Please contact our customer "
            "service with your order number to initiate a return. For quality issues or damaged "
            "items, please provide photos for our quality assurance team to assess."
        ),
        follow_up_questions=(
            "How do I return a damaged product?",
            "Can I exchange my order?",
            "What's your refund process?",
        ),
    ),
    KnowledgeEntry(
        topic="contact",
        keywords=(
            "contact", "email", "phone", "call", "support", "talk", "reach", "service", "help",
            "assistance", "representative", "chat",
        ),
        template=StaticTemplate(
            f"You can reach our team at {COMPANY_EMAIL} or call us at {COMPANY_PHONE}. Our "
            "offices are located at 4-130 Gandhi Nagar, Karur Sukkaliyur. Our customer service "
            f"team is available {BUSINESS_HOURS}."
        ),
        follow_up_questions=(
            "What are your business hours?",
            "Do you have a customer support chat?",
            "How can I schedule a meeting?",
        ),
        page="contact",
    ),
    KnowledgeEntry(
        topic="account",
        keywords=(
            "account", "login", "password", "sign up", "register", "profile", "forgot", "reset",
            "credentials", "email", "personal information",
        ),
        template=StaticTemplate(
            "You can create an account or login from the user icon in the top navigation bar. "
            "This will allow you to track orders, save favorite products, and expedite checkout. "
            "If you've forgotten your password, use the 'Forgot Password' link on the login page."
        ),
        follow_up_questions=(
            "How do I reset my password?",
            "What are the benefits of creating an account?",
            "Is my personal information secure?",
        ),
    ),
    KnowledgeEntry(
        topic="sustainability",
        keywords=(
            "eco", "sustainable", "environment", "green", "recycled", "planet", "organic",
            "carbon", "footprint", "responsible", "ethical", "conservation", "eco-friendly",
            "renewable",
        ),
        text=(
            "Sustainability is central to KSP Yarns' operations. Our comprehensive environmental "
            "initiatives include: 1) Solar-powered manufacturing facilities reducing carbon "
            "emissions, 2) Advanced water recycling and conservation systems achieving 60% water "
            "reuse, 3) Zero-waste manufacturing with complete waste recycling and reuse, 4) "
            "Sourcing organic and recycled raw materials from certified suppliers, 5) "
            "Energy-efficient machinery reducing power consumption by 40%. We hold prestigious "
            "certifications: GOTS (Global Organic Textile Standard) for organic products, GRS "
            "(Global Recycled Standard) for recycled content verification, ISO 14001 for "
            "Environmental Management, and OEKO-TEX Standard 100 for harmful substance testing. "
            "Our ambitious sustainability goals include achieving carbon neutrality by 2030, 100% "
            "renewable energy usage, zero landfill waste by 2025, and 50% reduction in water "
            "consumption by 2028."
        ),
        template=StaticTemplate(
            "Sustainability is at the core of KSP Yarns' operations:\n\n"
            "Environmental Initiatives:\n"
            "• Solar-powered manufacturing facilities\n"
            "• 60% water recycling and conservation\n"
            "• Zero-waste manufacturing processes\n"
            "• Organic and recycled raw materials\n"
            "• 40% reduction in energy consumption\n\n"
            "Certifications:\n"
            "• GOTS (Global Organic Textile Standard)\n"
            "• GRS (Global Recycled Standard)\n"
            "• ISO 14001 (Environmental Management)\n"
            "• OEKO-TEX Standard 100\n\n"
            "Future Goals:\n"
            "• Carbon neutrality by 2030\n"
            "• 100% renewable energy usage\n"
            "• Zero landfill waste by 2025\n"
            "• 50% water consumption reduction by 2028\n\n"
            "We're committed to sustainable textile manufacturing without compromising quality."
        ),
        follow_up_questions=(
            "Tell me about your recycled yarns",
            "What is GOTS certification?",
            "How do you reduce water usage?",
        ),
        page="sustainability",
    ),
    KnowledgeEntry(
        topic="company",
        keywords=(
            "company", "about", "history", "background", "founded", "who are you", "ksp",
            "mission", "vision", "values", "team", "establishment", "tell me about your company",
        ),
        template=StaticTemplate(
            "KSP Yarns was established in 2005 with a mission to provide premium quality yarns "
            "while embracing sustainable practices. We've grown from a small local supplier to an "
            "international yarn manufacturer known for quality, innovation, and environmental "
            "responsibility. Our team includes experienced textile engineers and quality control "
            "experts committed to excellence."
        ),
        follow_up_questions=(
            "Who founded KSP Yarns?",
            "What is your company's mission?",
            "How many employees do you have?",
        ),
        page="about",
    ),
    KnowledgeEntry(
        topic="wholesale",
        keywords=(
            "wholesale", "bulk", "large order", "business", "quantity", "distributor",
            "reseller", "commercial", "partner", "collaboration", "b2b",
        ),
        template=StaticTemplate(
            "We offer competitive wholesale pricing for bulk orders. Our minimum order quantity "
            "varies by product type. Please contact our business development team at "
            f"{COMPANY_EMAIL} with details of your requirements for a customized quote. We offer "
            "special terms for long-term business relationships."
        ),
        follow_up_questions=(
            "What are your wholesale terms?",
            "Do you offer partnership programs?",
            "Can I become a distributor?",
        ),
    ),
    KnowledgeEntry(
        topic="specifications",
        keywords=(
            "specification", "technical", "details", "count", "thickness", "strength",
            "quality", "parameters", "characteristics", "property", "standard",
        ),
        template=StaticTemplate(
            "Our yarns come in various specifications including different counts (Ne), twist "
            "levels, and strength parameters. Each product page lists detailed specifications. "
            "For customized specifications, please contact our technical team. We can provide lab "
            "reports and quality certificates upon request."
        ),
        follow_up_questions=(
            "What yarn counts do you offer?",
            "Can you provide technical data sheets?",
            "What testing standards do you follow?",
        ),
    ),
    KnowledgeEntry(
        topic="care",
        keywords=(
            "care", "wash", "maintain", "instruc", "clean", "storage", "preserve", "handle",
            "quality", "longevity", "deteriorate",
        ),
        template=StaticTemplate(
            "For optimal yarn storage, keep in a cool, dry place away from direct sunlight. Most "
            "yarns should be stored in their original packaging or airtight containers to prevent "
            "dust accumulation and moisture damage. Different yarn types may have specific care "
            "requirements which are provided with your purchase. For detailed care instructions "
            "for a specific product, please refer to the product information sheet."
        ),
    ),
    KnowledgeEntry(
        topic="order",
        keywords=(
            "order", "status", "track", "placed", "processing", "confirm", "cancel", "modify",
            "change", "update", "timeline", "progress",
        ),
        template=StaticTemplate(
            "You can track your order status by logging into your account and viewing 'Order "
            "History'. Alternatively, use the tracking number provided in your shipping "
            "confirmation email. If you need to modify an order, please contact customer service "
            "immediately as changes may only be possible before shipping. For order "
            "cancellations, please refer to our cancellation policy on the website."
        ),
        follow_up_questions=(
            "How long does shipping take?",
            "Can I modify my order after placing it?",
            "What's your cancellation policy?",
        ),
    ),
    KnowledgeEntry(
        topic="order_placement",
        keywords=(
            "place order", "place an order", "buy", "purchase", "checkout", "ordering",
            "how to order", "make order", "ordering process", "how can i order",
            "how do i place", "want to buy", "want to purchase",
        ),
        text=(
            "To place an order with KSP Yarns, you have multiple convenient options: 1) Through "
            "our website - Browse our product catalog, select desired yarns with specifications, "
            "add to cart, and proceed to secure checkout. 2) Email orders - Send detailed "
            f"requirements to {COMPANY_EMAIL} including yarn type, count, quantity, and delivery "
            f"address. 3) Phone orders - Call {COMPANY_PHONE} during business hours "
            "(Monday-Saturday, 9 AM-6 PM IST) to speak with our sales team. For bulk or custom "
            "orders, our team will provide detailed quotations, discuss specifications, arrange "
            "samples if needed, and guide you through the complete ordering process. Minimum "
            "order quantities vary by yarn type - please check specific product pages or contact "
            "us for MOQ details."
        ),
        template=StaticTemplate(
            "Placing an order with KSP Yarns is simple and convenient:\n\n"
            "• Online: Browse our website, select products, and checkout securely\n"
            f"• Email: Send requirements to {COMPANY_EMAIL}\n"
            f"• Phone: Call {COMPANY_PHONE} (Mon-Sat, 9 AM-6 PM IST)\n\n"
            "For bulk orders:\n"
            "• We provide detailed quotations\n"
            "• Sample cards available for quality evaluation\n"
            "• Custom specifications accepted\n"
            "• Flexible payment terms for B2B clients\n\n"
            "Our team will guide you through specifications, pricing, and delivery timelines. "
            "Minimum order quantities vary by product type."
        ),
        follow_up_questions=(
            "What payment methods do you accept?",
            "What's your minimum order quantity?",
            "Can I get samples before ordering?",
        ),
    ),
    KnowledgeEntry(
        topic="custom",
        keywords=(
            "custom", "personalize", "specific", "special", "unique", "tailor", "bespoke",
            "design", "requirement", "particular", "exclusive",
        ),
        template=StaticTemplate(
            "We offer custom yarn development services tailored to your specific requirements. "
            "This includes customized blends, counts, colors, and finishing options. Custom "
            "orders typically require a minimum quantity and development time. Please contact our "
            "product development team with your specifications, and we'll work with you to "
            "create the perfect yarn for your needs."
        ),
    ),
    KnowledgeEntry(
        topic="certification",
        keywords=(
            "certif", "standard", "quality", "iso", "compliance", "test", "audit", "approval",
            "regulation", "authority", "verified",
        ),
        template=StaticTemplate(
            "Our yarns meet international quality standards and are certified by organizations "
            "like OEKO-TEX, GOTS, and GRS for our organic and recycled products. We maintain ISO "
            "9001 for quality management and ISO 14001 for environmental management systems. All "
            "our certificates are available upon request, and key certifications are displayed "
            "on our product pages."
        ),
    ),
    KnowledgeEntry(
        topic="payment",
        keywords=(
            "payment", "pay", "method", "credit", "debit", "card", "bank", "transfer", "upi",
            "online", "transaction", "secure", "option",
        ),
        template=StaticTemplate(
            "We accept multiple payment methods including credit/debit cards, bank transfers, "
            "UPI, and international payment systems. All online transactions are secured with "
            "industry-standard encryption. For large orders, we also offer letter of credit and "
            "other B2B payment options. Contact our finance team for special payment arrangements "
            "or questions regarding transactions."
        ),
    ),
    KnowledgeEntry(
        topic="location",
        keywords=(
            "location", "factory", "mill", "office", "address", "visit", "facility",
            "headquarter", "site", "place", "direction", "map",
        ),
        template=StaticTemplate(
            f"Our main facility and office is located at {COMPANY_ADDRESS}. We welcome factory "
            f"visits by appointment. Please contact us at {COMPANY_EMAIL} to schedule a visit. We "
            "also have distribution centers in major textile hubs across India and representative "
            "offices in select international locations."
        ),
    ),
    KnowledgeEntry(
        topic="trends",
        keywords=(
            "trend", "fashion", "popular", "latest", "season", "upcoming", "modern", "style",
            "design", "forecast", "industry",
        ),
        template=StaticTemplate(
            "The current yarn trends include sustainable fibers, textured yarns, and natural "
            "dyes. We stay updated with global textile trends and regularly introduce new "
            "products aligned with market demands. Our R&D team works closely with fashion "
            "forecasters to anticipate upcoming trends in the textile industry."
        ),
        follow_up_questions=(
            "What colors are trending this season?",
            "How do you predict yarn trends?",
            "Do you offer trendy specialty yarns?",
        ),
    ),
    KnowledgeEntry(
        topic="samples",
        keywords=(
            "sample", "test", "try", "before", "small", "quantity", "trial", "evaluation",
            "quality check",
        ),
        template=StaticTemplate(
            "We offer sample cards and small quantity samples for quality evaluation before bulk "
            "orders. Standard samples are available for a nominal fee which is credited towards "
            "your first order. For custom samples, please contact our sales team with your "
            "specific requirements and intended application."
        ),
        follow_up_questions=(
            "How can I order a sample?",
            "Is there a fee for samples?",
            "How long does sample delivery take?",
        ),
    ),
    KnowledgeEntry(
        topic="colors",
        keywords=(
            "color", "shade", "dye", "tone", "hue", "pantone", "match", "palette", "range",
            "options",
        ),
        template=StaticTemplate(
            "We offer yarns in a wide range of standard colors as well as custom color matching "
            "services. Our in-house dyeing facilities can match specific Pantone colors or your "
            "provided samples. We maintain color consistency across batches and offer color "
            "fastness guarantees for our dyed yarns."
        ),
        follow_up_questions=(
            "Can you match specific Pantone colors?",
            "What's your color consistency policy?",
            "Do you offer natural dyed yarns?",
        ),
    ),
    KnowledgeEntry(
        topic="production",
        keywords=(
            "production", "manufacturing", "make", "process", "facility", "machine",
            "technology", "equipment", "capacity",
        ),
        template=StaticTemplate(
            "Our state-of-the-art manufacturing facilities use modern technology for yarn "
            "production. Our processes include blowroom, carding, drawing, roving, ring spinning, "
            "open-end spinning, and post-spinning processes. We have a monthly production "
            "capacity of approximately 500 tons and employ strict quality control at every stage "
            "of production."
        ),
        follow_up_questions=(
            "What spinning technologies do you use?",
            "What's your production capacity?",
            "Can I visit your production facility?",
        ),
    ),
    KnowledgeEntry(
        topic="quality",
        keywords=(
            "quality", "standard", "testing", "check", "control", "assurance", "inspection",
            "consistency", "defect", "qc", "qa", "test",
        ),
        text=(
            "Quality assurance is paramount at KSP Yarns. We implement a comprehensive "
            "multi-stage quality management system with rigorous testing at every production "
            "phase. Our quality control includes: 1) Raw material inspection and approval from "
            "certified suppliers, 2) In-process quality checks during blowroom, carding, drawing, "
            "roving, and spinning stages, 3) Final product testing using advanced Uster "
            "technologies for count accuracy, strength, elongation, evenness, imperfections, and "
            "hairiness. We use state-of-the-art testing equipment including Uster Tester 6, "
            "Tensorapid strength tester, and advanced moisture analyzers. Our quality team "
            "conducts batch consistency checks, color fastness testing, and comprehensive "
            "reporting. We follow international testing standards including ASTM, ISO, and BS "
            "methods. Every batch is accompanied by quality certificates and test reports. We "
            "maintain 99.5% quality acceptance rate and offer quality guarantees with our "
            "products."
        ),
        template=StaticTemplate(
            "Quality is our top priority at KSP Yarns:\n\n"
            "Testing Standards:\n"
            "• Count accuracy: ±2% tolerance\n"
            "• Strength: Minimum 85% CSP\n"
            "• Evenness: U% <12%\n"
            "• Comprehensive IPI testing\n"
            "• Color fastness: Grade 4-5\n\n"
            "Quality Control Process:\n"
            "• Raw material inspection\n"
            "• In-process monitoring at every stage\n"
            "• Advanced Uster technology testing\n"
            "• Batch consistency verification\n"
            "• Final product certification\n\n"
            "We follow ASTM, ISO, and BS international standards, achieving 99.5% quality "
            "acceptance. Every batch includes detailed test reports."
        ),
        follow_up_questions=(
            "What testing equipment do you use?",
            "Can you provide quality certificates?",
            "What are your quality standards?",
        ),
    ),
    KnowledgeEntry(
        topic="innovation",
        keywords=(
            "innovation", "research", "development", "new", "technology", "advance", "future",
            "improvement", "r&d",
        ),
        template=StaticTemplate(
            "Innovation drives our business forward. Our R&D department continuously explores "
            "new yarn technologies, sustainable processing methods, and performance-enhancing "
            "treatments. We invest in research partnerships with textile institutions and "
            "regularly upgrade our manufacturing technology to stay at the forefront of yarn "
            "innovation."
        ),
        follow_up_questions=(
            "What are your latest innovations?",
            "Do you develop custom yarn solutions?",
            "How much do you invest in R&D?",
        ),
    ),
    KnowledgeEntry(
        topic="applications",
        keywords=(
            "application", "use", "suitable", "purpose", "ideal", "recommend", "best for",
            "intended", "usage",
        ),
        template=StaticTemplate(
            "Our yarns are suitable for various applications including apparel, home textiles, "
            "technical textiles, and industrial uses. We can recommend specific yarn types based "
            "on your end product requirements. Each product in our catalog includes recommended "
            "applications to help you choose the right yarn for your project."
        ),
        follow_up_questions=(
            "Which yarns are best for knitting?",
            "Do you have yarns for technical textiles?",
            "What yarns do you recommend for sportswear?",
        ),
    ),
    KnowledgeEntry(
        topic="greeting",
        keywords=(
            "hi", "hello", "hey", "greetings", "good morning", "good afternoon", "good evening",
            "howdy", "sup", "yo", "hiya",
        ),
        template=DynamicTemplate(_greeting),
        follow_up_questions=(
            "What products do you offer?",
            "Can you tell me about your company?",
            "How can I place an order?",
        ),
    ),
    KnowledgeEntry(
        topic="thanks",
        keywords=("thank", "thanks", "appreciate", "grateful", "helpful"),
        template=StaticTemplate(
            "You're welcome! I'm happy I could help. Is there anything else you'd like to know "
            "about our yarns or services?"
        ),
        follow_up_questions=(
            "Tell me about your sustainability practices",
            "What are your bestselling products?",
            "How can I contact your team?",
        ),
    ),
    KnowledgeEntry(
        topic="goodbye",
        keywords=("bye", "goodbye", "see you", "farewell", "end"),
        template=StaticTemplate(
            "Thank you for chatting with the KSP Yarns assistant. Feel free to return anytime "
            "you have questions. Have a great day!"
        ),
        follow_up_questions=(
            "Before I go, how can I place an order?",
            "Can I get a product catalog?",
            "What are your contact details?",
        ),
    ),
    KnowledgeEntry(
        topic="general",
        keywords=(
            "how are you", "what's up", "how's it going", "whats happening", "how do you work",
            "who are you",
        ),
        template=DynamicTemplate(_small_talk),
        follow_up_questions=(
            "Tell me about your company",
            "What products do you specialize in?",
            "How can you help me today?",
        ),
    ),
    KnowledgeEntry(
        topic="help",
        keywords=(
            "help", "assist", "support", "guide", "explain", "show me", "how to use",
            "what can you do",
        ),
        template=StaticTemplate(
            "I can help you with information about our products, ordering process, shipping "
            "details, company information, and more. You can ask me specific questions, and I'll "
            "do my best to assist you. You can also click on the suggested questions below for "
            "quick answers."
        ),
        follow_up_questions=(
            "What products do you offer?",
            "How do I place an order?",
            "Tell me about your yarn quality",
        ),
    ),
    KnowledgeEntry(
        topic="name",
        keywords=("your name", "who are you", "what are you called", "what should i call you"),
        template=StaticTemplate(
            "I'm KSP's virtual assistant, designed to help you with information about our yarns "
            "and services. You can think of me as your personal guide to everything KSP Yarns "
            "offers. What would you like to know?"
        ),
        follow_up_questions=(
            "What can you help me with?",
            "Tell me about KSP Yarns",
            "What products do you offer?",
        ),
    ),
    KnowledgeEntry(
        topic="cancellation",
        keywords=(
            "cancel", "cancle", "cancell", "canel", "cancellation", "stop order", "don't want",
            "oredr", "ordr",
        ),
        text=(
            "To cancel an order, contact our customer service team as soon as possible at "
            f"{COMPANY_EMAIL} or call {COMPANY_PHONE}. Orders can typically be cancelled if they "
            "haven't entered the shipping process. Please provide your order number and contact "
            "information. If your order has already shipped, you may need to follow our return "
            "process instead."
        ),
        template=StaticTemplate(
            "To cancel your order, please contact our customer service team as soon as possible "
            f"at {COMPANY_EMAIL} or call {COMPANY_PHONE}. Orders can typically be cancelled if "
            "they haven't entered the shipping process. Please provide your order number and "
            "contact information. If your order has already shipped, you may need to follow our "
            "return process instead."
        ),
        follow_up_questions=(
            "What's your return policy?",
            "How do I track my order status?",
            "Can I get a refund for cancelled orders?",
        ),
    ),
    KnowledgeEntry(
        topic="cotton_yarns",
        keywords=("cotton", "organic cotton", "recycled cotton", "combed cotton", "carded cotton"),
        text=(
            "Our cotton yarn range includes organic cotton, recycled cotton, combed cotton, and "
            "carded cotton variants. We offer counts from Ne 4 to Ne 80, suitable for apparel, "
            "home textiles, and industrial applications. All our cotton yarns meet international "
            "quality standards and are available with various certifications including GOTS for "
            "organic cotton."
        ),
        template=StaticTemplate(
            "Our cotton yarn range includes organic, recycled, combed, and carded variants from "
            "Ne 4 to Ne 80. These are perfect for apparel, home textiles, and various industrial "
            "applications. Our cotton yarns are known for their consistency, strength, and "
            "excellent dyeing properties. We also offer GOTS certified organic cotton yarns for "
            "eco-conscious projects."
        ),
        follow_up_questions=(
            "What's the difference between combed and carded cotton?",
            "Are your organic cotton yarns certified?",
            "What are the most popular cotton yarn counts?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="polyester_yarns",
        keywords=("polyester", "virgin polyester", "recycled polyester", "textured polyester"),
        text=(
            "Our polyester yarn collection includes virgin polyester, recycled polyester, and "
            "textured polyester options. Available in counts from Ne 10 to Ne 60, these yarns are "
            "ideal for technical textiles, sportswear, and industrial fabrics. Our recycled "
            "polyester yarns are GRS certified and offer the same performance as virgin polyester "
            "with reduced environmental impact."
        ),
        template=StaticTemplate(
            "We offer virgin polyester, recycled polyester, and textured polyester yarns in "
            "counts from Ne 10 to Ne 60. These are perfect for technical textiles, sportswear, "
            "and industrial applications. Our recycled polyester yarns carry GRS certification "
            "and provide excellent strength, abrasion resistance, and colorfastness while "
            "reducing environmental impact."
        ),
        follow_up_questions=(
            "What are the benefits of recycled polyester?",
            "How does textured polyester differ from regular polyester?",
            "What applications are polyester yarns best suited for?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="blended_yarns",
        keywords=("blend", "blended", "poly-cotton", "cotton-viscose", "specialty blend"),
        text=(
            "Our blended yarn selection includes poly-cotton blends, cotton-viscose blends, and "
            "specialty blends in counts from Ne 6 to Ne 50. These yarns combine the best "
            "properties of different fibers for versatile applications across apparel and home "
            "textiles. Common blend ratios include 65/35, 50/50, and 60/40 polyester/cotton."
        ),
        template=StaticTemplate(
            "We manufacture various blended yarns including poly-cotton, cotton-viscose, and "
            "specialty blends in counts from Ne 6 to Ne 50. Our blends combine the strengths of "
            "different fibers - for example, our poly-cotton blends offer the comfort of cotton "
            "with the durability of polyester. Common blend ratios include 65/35, 50/50, and "
            "60/40 polyester/cotton, perfect for apparel and home textiles."
        ),
        follow_up_questions=(
            "What are the advantages of blended yarns?",
            "What's your most popular blend ratio?",
            "Can you create custom blends?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="specialty_yarns",
        keywords=("specialty", "melange", "slub", "fancy", "core-spun"),
        text=(
            "Our specialty yarn line features melange yarns, slub yarns, fancy yarns, and "
            "core-spun yarns designed for fashion apparel and premium textiles. These yarns offer "
            "unique aesthetic and functional properties, creating distinctive fabrics with "
            "character and appeal. Our specialty yarns are produced using advanced technologies "
            "to ensure consistent quality."
        ),
        template=StaticTemplate(
            "Our specialty yarns include melange, slub, fancy, and core-spun varieties designed "
            "for fashion-forward applications. Melange yarns create heathered effects, slub yarns "
            "add texture, fancy yarns provide unique visual interest, and core-spun yarns offer "
            "special performance characteristics. These specialty products are perfect for "
            "premium fashion apparel and distinctive textile products."
        ),
        follow_up_questions=(
            "How are melange yarns different from regular yarns?",
            "What effects can I achieve with slub yarns?",
            "Do you offer custom specialty yarn development?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="spinning_technologies",
        keywords=(
            "spinning", "technology", "ring spinning", "open-end", "oe spinning",
            "vortex spinning", "manufacturing process",
        ),
        text=(
            "We employ multiple spinning technologies including Ring Spinning, Open-End Spinning, "
            "and Vortex Spinning. Ring spinning produces high-quality yarns with excellent "
            "strength and softness. Open-End spinning offers cost-effective production for "
            "coarser counts. Vortex spinning creates yarns with low hairiness and good abrasion "
            "resistance."
        ),
        template=StaticTemplate(
            "We utilize three primary spinning technologies: Ring Spinning produces premium yarns "
            "with excellent strength and softness, ideal for fine fabrics. Open-End (OE) Spinning "
            "is cost-effective for medium to coarse counts with good uniformity. Vortex Spinning "
            "creates yarns with minimal hairiness and superior abrasion resistance, perfect for "
            "performance fabrics. Each technology offers distinct advantages for different end "
            "applications."
        ),
        follow_up_questions=(
            "Which spinning method produces the strongest yarns?",
            "What count ranges can you produce with each technology?",
            "How do I choose the right spinning method for my project?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="certifications",
        keywords=(
            "certif", "standard", "quality", "iso", "gots", "grs", "oeko-tex", "compliance",
            "test", "audit", "approval", "regulation", "authority", "verified",
        ),
        text=(
            "Our yarns are certified by leading organizations including GOTS (for organic "
            "yarns), GRS (for recycled content), OEKO-TEX Standard 100 (for harmful substances "
            "testing), ISO 9001 (quality management), and ISO 14001 (environmental management). "
            "These certifications ensure our products meet international standards for quality, "
            "sustainability, and safety."
        ),
        template=StaticTemplate(
            "Our yarns meet international quality standards and are certified by organizations "
            "like OEKO-TEX, GOTS, and GRS for our organic and recycled products. We maintain ISO "
            "9001 for quality management and ISO 14001 for environmental management systems. All "
            "our certificates are available upon request, and key certifications are displayed "
            "on our product pages."
        ),
        follow_up_questions=(
            "What does the GOTS certification cover?",
            "How often are your facilities audited for certifications?",
            "Can you provide certification documentation with orders?",
        ),
        page="products",
    ),
    KnowledgeEntry(
        topic="company_history",
        keywords=(
            "history", "background", "journey", "story", "founded", "establishment",
            "beginning", "started",
        ),
        text=(
            "Founded in 2005, KSP Yarns began as a small yarn trading business in Karur, Tamil "
            "Nadu. Over the years, we've grown into a leading manufacturer with state-of-the-art "
            "facilities. Key milestones include establishing our first manufacturing facility in "
            "2008, achieving ISO 9001 certification in 2012, launching our recycled yarn line in "
            "2015, expanding to international markets in 2018, obtaining GOTS and GRS "
            "certifications in 2020, and inaugurating our new state-of-the-art facility in 2022."
        ),
        template=StaticTemplate(
            "KSP Yarns was established in 2005 as a small trading business in Karur and has grown "
            "into a leading yarn manufacturer. Our journey includes establishing our first "
            "manufacturing facility in 2008, launching recycled yarns in 2015, expanding "
            "internationally in 2018, and opening our state-of-the-art facility in 2022. "
            "Throughout our history, we've maintained a commitment to quality, sustainability, "
            "and innovation in the textile industry."
        ),
        follow_up_questions=(
            "Who founded KSP Yarns?",
            "How has your product range evolved over the years?",
            "What was your first international market?",
        ),
        page="about",
    ),
    KnowledgeEntry(
        topic="mission_vision",
        keywords=("mission", "vision", "goals", "aim", "purpose", "objective", "aspiration"),
        text=(
            "Our mission is to provide premium quality yarns while embracing sustainable "
            "practices and continuous innovation. Our vision is to become the global leader in "
            "sustainable yarn manufacturing through technological excellence and a "
            "customer-centric approach. Our core values include Quality, Sustainability, "
            "Innovation, Integrity, and Customer Satisfaction."
        ),
        template=StaticTemplate(
            "Our mission is to provide premium quality yarns while embracing sustainable "
            "practices and continuous innovation. Our vision is to become the global leader in "
            "sustainable yarn manufacturing through technological excellence and a "
            "customer-centric approach. These principles guide everything we do, from product "
            "development to customer service, as we strive to exceed expectations while "
            "minimizing environmental impact."
        ),
        follow_up_questions=(
            "How do you implement your values in daily operations?",
            "What innovations are you currently working on?",
            "How do you measure customer satisfaction?",
        ),
        page="about",
    ),
    KnowledgeEntry(
        topic="sustainability_initiatives",
        keywords=(
            "sustainability", "eco", "environment", "green", "sustainable", "initiative",
            "program", "conservation", "responsible",
        ),
        text=(
            "Our sustainability initiatives include solar-powered manufacturing facilities, "
            "water recycling and conservation systems, zero-waste manufacturing processes, "
            "organic and recycled raw material sourcing, and energy-efficient machinery. We hold "
            "certifications including GOTS, GRS, ISO 14001, and OEKO-TEX Standard 100. Our goals "
            "include achieving carbon neutrality by 2030, 100% renewable energy usage, zero "
            "landfill waste by 2025, and reducing water consumption by 50% by 2028."
        ),
        template=StaticTemplate(
            "Sustainability is at the core of our values. We use eco-friendly manufacturing "
            "processes and offer a range of recycled and organic yarn options. Our factory "
            "employs water conservation methods, solar power, and waste reduction practices. "
            "We're certified by global sustainability standards and continuously work to improve "
            "our environmental impact."
        ),
        follow_up_questions=(
            "What sustainability certifications do you have?",
            "How do you recycle yarns?",
            "What's your carbon footprint reduction strategy?",
        ),
        page="sustainability",
    ),
    KnowledgeEntry(
        topic="contact_details",
        keywords=(
            "contact", "reach", "email", "phone", "call", "address", "location", "office",
            "factory", "headquarters",
        ),
        text=(
            f"Our main facility and office is located at {COMPANY_ADDRESS}. You can contact us "
            f"via email at {COMPANY_EMAIL} or call us at {COMPANY_PHONE}. Our business hours are "
            f"{BUSINESS_HOURS}. We're also active on social media platforms including Facebook, "
            "Instagram, and LinkedIn."
        ),
        template=StaticTemplate(
            f"You can reach our team at {COMPANY_EMAIL} or call us at {COMPANY_PHONE}. Our "
            "offices are located at 4-130 Gandhi Nagar, Karur Sukkaliyur. Our customer service "
            f"team is available {BUSINESS_HOURS}."
        ),
        follow_up_questions=(
            "What are your business hours?",
            "Do you have a customer support chat?",
            "How can I schedule a meeting?",
        ),
        page="contact",
    ),
)


class KnowledgeBase:
    """Read-only topic table. Built once, shared by every session."""

    def __init__(self, entries: Iterable[KnowledgeEntry] = ENTRIES) -> None:
        self._entries: tuple[KnowledgeEntry, ...] = tuple(entries)
        self._by_topic: dict[str, KnowledgeEntry] = {}
        for entry in self._entries:
            if entry.topic in self._by_topic:
                raise ValueError(f"duplicate knowledge base topic: {entry.topic!r}")
            self._by_topic[entry.topic] = entry

    @property
    def entries(self) -> tuple[KnowledgeEntry, ...]:
        return self._entries

    def get(self, topic: str) -> KnowledgeEntry:
        try:
            return self._by_topic[topic]
        except KeyError:
            raise UnknownTopicError(topic) from None

    def find(self, topic: str | None) -> KnowledgeEntry | None:
        if topic is None:
            return None
        return self._by_topic.get(topic)

    def __contains__(self, topic: object) -> bool:
        return topic in self._by_topic

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# Quick answers that bypass scoring
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FaqEntry:
    patterns: tuple[str, ...]
    answer: str


FAQ_ENTRIES: tuple[FaqEntry, ...] = (
    FaqEntry(
        (r"\b(moq|minimum order( quantity)?)\b",),
        "Our minimum order quantity depends on the yarn type and count. Standard yarns usually "
        "start from 100 kg per count, while custom blends and dyed yarns start from 500 kg. "
        f"Contact {COMPANY_EMAIL} for the exact MOQ of a specific product.",
    ),
    FaqEntry(
        (
            r"\b(business|working|office|opening) hours\b",
            r"\bwhen (are|is) (you|your office) open\b",
        ),
        f"Our team is available {BUSINESS_HOURS}. Messages sent outside these hours are "
        "answered on the next business day.",
    ),
    FaqEntry(
        (r"\b(ship|deliver)\w* (internationally|abroad|overseas|outside india)\b",
         r"\binternational (shipping|delivery)\b"),
        "Yes, we ship internationally to most locations. Delivery times and freight charges "
        "depend on the destination and order volume; our team shares a quote with every export "
        "order.",
    ),
    FaqEntry(
        (r"\bpayment (methods|options)\b", r"\bhow (can|do) i pay\b"),
        "We accept credit/debit cards, bank transfers, UPI and international payment systems. "
        "Letters of credit are available for large B2B orders.",
    ),
    FaqEntry(
        (r"\b(phone|contact) number\b", r"\bemail address\b"),
        f"You can email us at {COMPANY_EMAIL} or call {COMPANY_PHONE}.",
    ),
)  # fmt: skip


@dataclass(frozen=True)
class YarnProfile:
    name: str
    strengths: tuple[str, ...]
    best_for: str


YARN_PROFILES: dict[str, YarnProfile] = {
    "cotton": YarnProfile(
        "Cotton",
        ("Natural, breathable and soft", "Excellent moisture absorption", "Dyes evenly"),
        "apparel, home textiles and skin-contact products",
    ),
    "polyester": YarnProfile(
        "Polyester",
        ("High strength and abrasion resistance", "Quick drying, low shrinkage",
         "Cost-effective, available recycled (GRS)"),
        "sportswear, technical textiles and industrial fabrics",
    ),
    "ring": YarnProfile(
        "Ring spun",
        ("Highest strength and softness", "Finer counts possible", "Premium hand feel"),
        "fine fabrics and premium apparel",
    ),
    "openend": YarnProfile(
        "Open-end (OE)",
        ("Faster, more economical production", "Good uniformity", "Suits medium to coarse counts"),
        "denim, towels and cost-sensitive products",
    ),
    "organic": YarnProfile(
        "Organic",
        ("Grown without synthetic pesticides", "GOTS certified supply chain",
         "Premium positioning"),
        "eco-conscious apparel and baby products",
    ),
    "recycled": YarnProfile(
        "Recycled",
        ("Made from post-consumer and post-industrial waste", "GRS certified content",
         "Lower water and energy footprint"),
        "sustainable collections with a circularity story",
    ),
}  # fmt: skip


@dataclass(frozen=True)
class ComparisonRule:
    patterns: tuple[str, ...]
    items: tuple[str, str]
    recommendation: str


COMPARISON_RULES: tuple[ComparisonRule, ...] = (
    ComparisonRule(
        (r"\b(cotton)\b.*\b(polyester|poly)\b", r"\b(polyester|poly)\b.*\b(cotton)\b"),
        ("cotton", "polyester"),
        "Choose cotton for comfort and breathability, polyester for durability and cost. "
        "Our poly-cotton blends combine both.",
    ),
    ComparisonRule(
        (r"\b(ring)\s*(spun|spinning)?\b.*\b(open\s*end|oe)\b",
         r"\b(open\s*end|oe)\b.*\b(ring)\s*(spun|spinning)?\b"),
        ("ring", "openend"),
        "Choose ring spun for premium, fine fabrics and open-end for economical, coarser counts.",
    ),
    ComparisonRule(
        (r"\b(organic)\b.*\b(recycled)\b", r"\b(recycled)\b.*\b(organic)\b"),
        ("organic", "recycled"),
        "Both are sustainable: organic for natural premium fibres, recycled for the lowest "
        "environmental footprint.",
    ),
)  # fmt: skip

COMPARISON_SUGGESTIONS: tuple[str, ...] = (
    "Which yarn do you recommend for my project?",
    "Can I get samples of both?",
    "What are the prices for these yarns?",
)

FAQ_SUGGESTIONS: tuple[str, ...] = (
    "What products do you offer?",
    "How do I place an order?",
    "Tell me about your company",
)

COMPLAINT_SUGGESTIONS: tuple[str, ...] = (
    "I need to speak with customer service",
    "How do I request a refund?",
    "What's your return policy?",
)

GRATITUDE_VARIANTS: tuple[str, ...] = (
    "You're welcome! Let me know if you need anything else.",
    "Happy to help! Feel free to ask more questions.",
    "My pleasure! Is there anything else you'd like to know?",
)

# Appended after an answer on this topic, now and then.
FOLLOW_UP_SENTENCES: dict[str, str] = {
    "products": " Would you like to know about pricing or samples?",
    "price": " Would you like information about bulk discounts or placing an order?",
    "shipping": " Would you like to track an existing order?",
    "quality": " Would you like to see our certifications or request samples?",
    "sustainability": " Would you like to know about our recycled yarn options?",
}

DEFAULT_SUGGESTIONS: tuple[str, ...] = (
    "What products do you offer?",
    "How do I place an order?",
    "Tell me about your sustainability practices",
)

INTENT_SUGGESTIONS: dict[IntentTag, tuple[str, ...]] = {
    IntentTag.PURCHASE: (
        "How do I place an order?",
        "What are your prices?",
        "What's your minimum order quantity?",
    ),
    IntentTag.INFORMATION: (
        "Tell me about your company",
        "What products do you offer?",
        "What certifications do you have?",
    ),
    IntentTag.SPECIFICATION: (
        "What yarn counts do you offer?",
        "Can you provide technical data sheets?",
        "Do you have GOTS or GRS certified yarns?",
    ),
    IntentTag.SHIPPING: (
        "What are your shipping options?",
        "How long does delivery take?",
        "Do you ship internationally?",
    ),
    IntentTag.SUSTAINABILITY: (
        "Tell me about your recycled yarns",
        "What sustainability certifications do you have?",
        "Do you offer organic cotton yarns?",
    ),
}


def suggestions_for_intent(intent: IntentTag) -> tuple[str, ...]:
    return INTENT_SUGGESTIONS.get(intent, DEFAULT_SUGGESTIONS)
